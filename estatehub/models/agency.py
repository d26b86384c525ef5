from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estatehub.database import Base
from estatehub.models.enums import AgencyStatus


class Agency(Base):
    """
    Агентство недвижимости (арендатор платформы)
    Владеет своими объектами, пользователями и заявками
    """
    __tablename__ = "agencies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)

    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    website = Column(String(500), nullable=True)

    address_line1 = Column(String(255), nullable=True)
    address_line2 = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    county = Column(String(255), nullable=True)
    postcode = Column(String(20), nullable=True)

    # Брендинг публичного сайта агентства
    logo_url = Column(String(1000), nullable=True)
    hero_image_url = Column(String(1000), nullable=True)
    primary_color = Column(String(7), nullable=False, default="#1e3a5f")
    secondary_color = Column(String(7), nullable=False, default="#0d2137")
    accent_color = Column(String(7), nullable=False, default="#d4a574")

    status = Column(String(50), nullable=False, default=AgencyStatus.PENDING_SETUP.value, index=True)
    plan_tier = Column(String(50), nullable=False, default="free")
    max_properties = Column(Integer, nullable=False, default=10)
    max_users = Column(Integer, nullable=False, default=5)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    properties = relationship("Property", back_populates="agency", cascade="all, delete")
    users = relationship("User", back_populates="agency", cascade="all, delete")
    enquiries = relationship("Enquiry", back_populates="agency", cascade="all, delete")

    @property
    def is_active(self) -> bool:
        return self.status == AgencyStatus.ACTIVE.value

    def __repr__(self):
        return f"<Agency(id={self.id}, slug={self.slug}, status={self.status})>"
