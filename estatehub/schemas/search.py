from typing import List

from estatehub.schemas.base import CamelModel
from estatehub.schemas.property import PropertySummary


class MapMarker(CamelModel):
    """Минимальные данные объекта для маркера на карте"""
    id: int
    latitude: float
    longitude: float
    price: float
    title: str
    status: str


class Pagination(CamelModel):
    """Метаданные пагинации"""
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=(total + limit - 1) // limit,
            has_more=page * limit < total,
        )


class PropertySearchResponse(CamelModel):
    """Ответ поиска: страница карточек, маркеры карты и пагинация"""
    data: List[PropertySummary]
    map_data: List[MapMarker]
    pagination: Pagination
