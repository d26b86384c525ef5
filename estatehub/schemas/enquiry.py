from typing import Optional, List
from datetime import datetime
from pydantic import EmailStr, Field

from estatehub.models.enums import EnquiryStatus
from estatehub.schemas.base import CamelModel
from estatehub.schemas.search import Pagination


class EnquiryCreate(CamelModel):
    """Заявка с публичного сайта"""
    name: str = Field(..., min_length=2)
    email: EmailStr
    phone: Optional[str] = Field(None, pattern=r"^[\d\s+()-]{10,20}$")
    message: str = Field(..., min_length=10)
    property_id: int


class EnquiryUpdate(CamelModel):
    """Обновление заявки сотрудником агентства"""
    status: Optional[EnquiryStatus] = None
    internal_notes: Optional[str] = None


class EnquiryPropertyBrief(CamelModel):
    """Объект, к которому относится заявка"""
    id: int
    title: str
    slug: str
    address_line1: str
    city: str


class EnquiryResponse(CamelModel):
    """Схема ответа с заявкой"""
    id: int
    property_id: int
    agency_id: int
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    source: str
    status: str
    internal_notes: Optional[str] = None
    responded_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    created_at: datetime
    property: Optional[EnquiryPropertyBrief] = None


class EnquiryListResponse(CamelModel):
    """Схема списка заявок с пагинацией"""
    data: List[EnquiryResponse]
    pagination: Pagination
