from typing import Optional, List, Literal
from datetime import datetime
from pydantic import EmailStr, Field

from estatehub.schemas.base import CamelModel
from estatehub.schemas.search import Pagination

# Роль администратора платформы через API не назначается
AgencyRole = Literal["AGENCY_ADMIN", "AGENT"]


class UserInvite(CamelModel):
    """Приглашение сотрудника в агентство"""
    email: EmailStr
    name: str = Field(..., min_length=2)
    role: AgencyRole = "AGENT"
    # Учитывается только для администратора платформы
    agency_id: Optional[int] = None


class UserUpdate(CamelModel):
    """Профиль пользователя. Роль и активность меняют только администраторы"""
    name: Optional[str] = Field(None, min_length=2)
    password: Optional[str] = Field(None, min_length=8)
    role: Optional[AgencyRole] = None
    is_active: Optional[bool] = None


ADMIN_ONLY_FIELDS = {"role", "is_active"}


class UserResponse(CamelModel):
    """Схема ответа с пользователем"""
    id: int
    email: str
    name: Optional[str] = None
    role: str
    agency_id: Optional[int] = None
    is_active: bool
    created_at: datetime


class UserInviteResponse(UserResponse):
    # Отдается только в режиме отладки, в продакшене пароль уходит письмом
    temp_password: Optional[str] = None


class UserListResponse(CamelModel):
    """Схема списка пользователей с пагинацией"""
    data: List[UserResponse]
    pagination: Pagination
