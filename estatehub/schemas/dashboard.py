from typing import List

from estatehub.schemas.base import CamelModel
from estatehub.schemas.enquiry import EnquiryResponse


class DashboardStats(CamelModel):
    """Сводка для главной страницы кабинета агентства"""
    total_properties: int
    for_sale: int
    to_rent: int
    available: int
    under_offer: int
    sold: int
    let_agreed: int
    total_enquiries: int
    new_enquiries: int
    recent_enquiries: List[EnquiryResponse]
