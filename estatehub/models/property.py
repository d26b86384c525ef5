from sqlalchemy import (
    Column, Integer, String, Float, DateTime, Text, ForeignKey, Boolean, Numeric, JSON, UniqueConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estatehub.database import Base
from estatehub.models.enums import AvailabilityStatus, PriceType


class Property(Base):
    """
    Объект недвижимости, выставленный агентством на продажу или в аренду.
    Slug уникален в пределах агентства, а не глобально.
    """
    __tablename__ = "properties"
    __table_args__ = (
        UniqueConstraint("agency_id", "slug", name="uq_properties_agency_slug"),
    )

    id = Column(Integer, primary_key=True, index=True)
    agency_id = Column(Integer, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False, index=True)
    slug = Column(String(255), nullable=False)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)

    status = Column(String(50), nullable=False, index=True)  # FOR_SALE / TO_RENT
    availability_status = Column(String(50), nullable=False, default=AvailabilityStatus.AVAILABLE.value)

    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255), nullable=True)
    city = Column(String(255), nullable=False, index=True)
    county = Column(String(255), nullable=True)
    postcode = Column(String(20), nullable=False, index=True)
    country = Column(String(100), nullable=False, default="United Kingdom")

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    price = Column(Numeric(12, 2), nullable=False, index=True)
    price_type = Column(String(50), nullable=False, default=PriceType.FIXED.value)

    property_type = Column(String(50), nullable=False, index=True)
    bedrooms = Column(Integer, nullable=False, default=0, index=True)
    bathrooms = Column(Integer, nullable=False, default=0)
    receptions = Column(Integer, nullable=False, default=0)

    key_features = Column(JSON, nullable=False, default=list)

    is_published = Column(Boolean, default=False, nullable=False, index=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    agency = relationship("Agency", back_populates="properties")
    images = relationship(
        "PropertyImage",
        back_populates="property",
        order_by="PropertyImage.sort_order",
        cascade="all, delete",
    )
    enquiries = relationship("Enquiry", back_populates="property", cascade="all, delete")

    def __repr__(self):
        return f"<Property(id={self.id}, slug={self.slug}, city={self.city}, price={self.price})>"
