from sqlalchemy import Column, Integer, String, ForeignKey, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estatehub.database import Base


class PropertyImage(Base):
    """
    Фотография объекта. Порядок показа задается sort_order
    """
    __tablename__ = "property_images"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    url = Column(String(1000), nullable=False)
    alt_text = Column(String(255), nullable=True)
    caption = Column(String(500), nullable=True)

    sort_order = Column(Integer, nullable=False, default=0)
    is_primary = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="images")

    def __repr__(self):
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, sort_order={self.sort_order})>"
