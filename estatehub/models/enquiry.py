from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estatehub.database import Base
from estatehub.models.enums import EnquiryStatus


class Enquiry(Base):
    """
    Заявка посетителя сайта по конкретному объекту
    """
    __tablename__ = "enquiries"

    id = Column(Integer, primary_key=True, index=True)

    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    # Дублируем агентство, чтобы кабинет фильтровал заявки без join
    agency_id = Column(Integer, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=False)
    source = Column(String(50), nullable=False, default="website")

    status = Column(String(50), nullable=False, default=EnquiryStatus.NEW.value, index=True)
    internal_notes = Column(Text, nullable=True)

    responded_at = Column(DateTime(timezone=True), nullable=True)
    closed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    property = relationship("Property", back_populates="enquiries")
    agency = relationship("Agency", back_populates="enquiries")

    def __repr__(self):
        return f"<Enquiry(id={self.id}, property_id={self.property_id}, status={self.status})>"
