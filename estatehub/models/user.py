from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estatehub.database import Base
from estatehub.models.enums import UserRole


class User(Base):
    """
    Пользователь: администратор платформы или сотрудник агентства
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=True)

    role = Column(String(50), nullable=False, default=UserRole.AGENT.value)
    # У администратора платформы агентства нет
    agency_id = Column(Integer, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=True, index=True)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    agency = relationship("Agency", back_populates="users")

    @property
    def is_platform_admin(self) -> bool:
        return self.role == UserRole.PLATFORM_ADMIN.value

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
