"""
Поиск объектов недвижимости: критерии -> предикат -> страница и маркеры карты
"""
from estatehub.services.search.criteria import SearchCriteria
from estatehub.services.search.predicate import (
    SearchPredicate, SortSpec, build_predicate, build_sort, page_window
)
from estatehub.services.search.store import PropertyStore, SqlAlchemyPropertyStore
from estatehub.services.search.service import PropertySearchService

__all__ = [
    "SearchCriteria",
    "SearchPredicate",
    "SortSpec",
    "build_predicate",
    "build_sort",
    "page_window",
    "PropertyStore",
    "SqlAlchemyPropertyStore",
    "PropertySearchService",
]
