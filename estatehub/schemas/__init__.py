from estatehub.schemas.property import (
    PropertySummary, PropertyDetail, PropertyCreate, PropertyUpdate,
    PropertyImageResponse, PropertyImageCreate, PropertyImageReorder
)
from estatehub.schemas.search import MapMarker, Pagination, PropertySearchResponse
from estatehub.schemas.enquiry import EnquiryCreate, EnquiryUpdate, EnquiryResponse, EnquiryListResponse
from estatehub.schemas.agency import AgencyCreate, AgencyUpdate, AgencyResponse, AgencyListResponse
from estatehub.schemas.user import UserInvite, UserUpdate, UserResponse, UserInviteResponse, UserListResponse
from estatehub.schemas.dashboard import DashboardStats

__all__ = [
    "PropertySummary", "PropertyDetail", "PropertyCreate", "PropertyUpdate",
    "PropertyImageResponse", "PropertyImageCreate", "PropertyImageReorder",
    "MapMarker", "Pagination", "PropertySearchResponse",
    "EnquiryCreate", "EnquiryUpdate", "EnquiryResponse", "EnquiryListResponse",
    "AgencyCreate", "AgencyUpdate", "AgencyResponse", "AgencyListResponse",
    "UserInvite", "UserUpdate", "UserResponse", "UserInviteResponse", "UserListResponse",
    "DashboardStats",
]
