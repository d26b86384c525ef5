"""
Поиск объектов: страница карточек, маркеры для карты и пагинация
"""
import logging
from typing import Any, Optional

from estatehub.config import get_settings
from estatehub.schemas.property import PropertySummary
from estatehub.schemas.search import MapMarker, Pagination, PropertySearchResponse
from estatehub.services.search.criteria import SearchCriteria
from estatehub.services.search.predicate import build_predicate, build_sort, page_window
from estatehub.services.search.store import PropertyStore

logger = logging.getLogger(__name__)
settings = get_settings()


class PropertySearchService:
    """
    Выполняет один поисковый запрос против переданного хранилища.
    Состояния между запросами не хранит.
    """

    def __init__(self, store: PropertyStore, images_per_listing: Optional[int] = None):
        self.store = store
        self.images_per_listing = (
            settings.search_images_per_listing if images_per_listing is None else images_per_listing
        )

    def search(self, criteria: SearchCriteria) -> PropertySearchResponse:
        predicate = build_predicate(criteria)
        sort = build_sort(criteria)
        offset, limit = page_window(criteria)

        total = self.store.count(predicate)

        page_records = []
        map_records = []
        if total > 0:
            if offset < total:
                page_records = self.store.find(predicate, sort, offset, limit)
            # Карта показывает все совпадения, а не только текущую страницу
            map_records = self.store.find_markers(predicate, sort)

        logger.debug(
            f"Property search: {criteria.model_dump(exclude_none=True, by_alias=True)} "
            f"-> total={total}, page={len(page_records)}"
        )

        return PropertySearchResponse(
            data=[self._to_summary(record) for record in page_records],
            map_data=[MapMarker.model_validate(record) for record in map_records],
            pagination=Pagination.build(criteria.page, criteria.limit, total),
        )

    def _to_summary(self, record: Any) -> PropertySummary:
        summary = PropertySummary.model_validate(record)
        summary.images = sorted(summary.images, key=lambda image: image.sort_order)[:self.images_per_listing]
        return summary
