import re
from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator

from estatehub.models.enums import AvailabilityStatus, PriceType, PropertyStatus, PropertyType
from estatehub.schemas.base import CamelModel

UK_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}\d[A-Z\d]? ?\d[A-Z]{2}$", re.IGNORECASE)


class PropertyImageResponse(CamelModel):
    """Фото объекта"""
    id: int
    url: str
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    sort_order: int
    is_primary: bool


class AgencyBrief(CamelModel):
    """Краткая информация об агентстве для карточки объекта"""
    id: int
    name: str
    slug: str
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None


class AgencyContact(AgencyBrief):
    """Агентство с контактами для страницы объекта"""
    email: str
    phone: Optional[str] = None


class PropertySummary(CamelModel):
    """Карточка объекта в поисковой выдаче"""
    id: int
    agency_id: int
    slug: str
    title: str
    description: str
    status: str
    availability_status: str
    address_line1: str
    city: str
    postcode: str
    latitude: float
    longitude: float
    price: float
    price_type: str
    property_type: str
    bedrooms: int
    bathrooms: int
    receptions: int
    key_features: List[str] = []
    is_published: bool
    is_featured: bool
    created_at: datetime
    images: List[PropertyImageResponse] = []
    agency: Optional[AgencyBrief] = None


class PropertyDetail(PropertySummary):
    """Полная информация об объекте"""
    address_line2: Optional[str] = None
    county: Optional[str] = None
    country: str
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    agency: Optional[AgencyContact] = None
    enquiry_count: int = 0


class PropertyBase(CamelModel):
    """Базовая схема формы объекта"""
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=20)
    status: PropertyStatus
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    address_line1: str = Field(..., min_length=1)
    address_line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    county: Optional[str] = None
    postcode: str
    country: str = "United Kingdom"
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    price: float = Field(..., ge=0)
    price_type: PriceType = PriceType.FIXED
    property_type: PropertyType
    bedrooms: int = Field(0, ge=0, le=20)
    bathrooms: int = Field(0, ge=0, le=20)
    receptions: int = Field(0, ge=0, le=20)
    key_features: List[str] = []
    is_published: bool = False
    is_featured: bool = False

    @field_validator("postcode")
    @classmethod
    def validate_postcode(cls, v):
        if not UK_POSTCODE_RE.match(v.strip()):
            raise ValueError("Некорректный почтовый индекс UK")
        return v.strip().upper()


class PropertyCreate(PropertyBase):
    """Схема для создания объекта"""
    pass


class PropertyUpdate(CamelModel):
    """Схема для обновления объекта"""
    title: Optional[str] = Field(None, min_length=5, max_length=200)
    description: Optional[str] = Field(None, min_length=20)
    status: Optional[PropertyStatus] = None
    availability_status: Optional[AvailabilityStatus] = None
    address_line1: Optional[str] = Field(None, min_length=1)
    address_line2: Optional[str] = None
    city: Optional[str] = Field(None, min_length=1)
    county: Optional[str] = None
    postcode: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    price: Optional[float] = Field(None, ge=0)
    price_type: Optional[PriceType] = None
    property_type: Optional[PropertyType] = None
    bedrooms: Optional[int] = Field(None, ge=0, le=20)
    bathrooms: Optional[int] = Field(None, ge=0, le=20)
    receptions: Optional[int] = Field(None, ge=0, le=20)
    key_features: Optional[List[str]] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None

    @field_validator("postcode")
    @classmethod
    def validate_postcode(cls, v):
        if v is None:
            return v
        if not UK_POSTCODE_RE.match(v.strip()):
            raise ValueError("Некорректный почтовый индекс UK")
        return v.strip().upper()


class PropertyImageCreate(CamelModel):
    """Схема добавления фото"""
    url: str = Field(..., min_length=1, max_length=1000)
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    is_primary: bool = False


class PropertyImageReorder(CamelModel):
    """Новый порядок фото: список id в порядке показа"""
    image_ids: List[int]
