from typing import Optional, List
from datetime import datetime
from pydantic import EmailStr, Field

from estatehub.models.enums import AgencyStatus
from estatehub.schemas.base import CamelModel
from estatehub.schemas.search import Pagination

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class AgencyCreate(CamelModel):
    """Создание агентства вместе с его администратором"""
    name: str = Field(..., min_length=2)
    slug: str = Field(..., min_length=2, pattern=r"^[a-z0-9-]+$")
    email: EmailStr
    phone: Optional[str] = None
    admin_email: EmailStr
    admin_name: str = Field(..., min_length=2)
    admin_password: str = Field(..., min_length=8)
    max_properties: int = Field(10, ge=1)
    max_users: int = Field(5, ge=1)
    plan_tier: str = "free"


class AgencyUpdate(CamelModel):
    """Настройки агентства. Последние четыре поля меняет только администратор платформы"""
    name: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    postcode: Optional[str] = None
    logo_url: Optional[str] = None
    hero_image_url: Optional[str] = None
    primary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    accent_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)

    status: Optional[AgencyStatus] = None
    max_properties: Optional[int] = Field(None, ge=1)
    max_users: Optional[int] = Field(None, ge=1)
    plan_tier: Optional[str] = None


ADMIN_ONLY_FIELDS = {"status", "max_properties", "max_users", "plan_tier"}


class AgencyCounts(CamelModel):
    properties: int = 0
    users: int = 0
    enquiries: int = 0


class AgencyResponse(CamelModel):
    """Схема ответа с агентством"""
    id: int
    name: str
    slug: str
    email: str
    phone: Optional[str] = None
    website: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    postcode: Optional[str] = None
    logo_url: Optional[str] = None
    hero_image_url: Optional[str] = None
    primary_color: str
    secondary_color: str
    accent_color: str
    status: str
    plan_tier: str
    max_properties: int
    max_users: int
    created_at: datetime
    counts: Optional[AgencyCounts] = None


class AgencyListResponse(CamelModel):
    """Схема списка агентств с пагинацией"""
    data: List[AgencyResponse]
    pagination: Pagination
