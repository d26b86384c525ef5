"""
Перевод критериев поиска в предикат, сортировку и окно страницы.

Предикат умеет две вещи: отдать условия для SQLAlchemy-запроса и проверить
одну запись в памяти. Обе ветки реализуют одни и те же правила отбора.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import and_, or_

from estatehub.models import Agency, Property
from estatehub.models.enums import AgencyStatus
from estatehub.services.search.criteria import SearchCriteria

KEYWORD_FIELDS = ("title", "description", "address_line1", "city", "postcode")

SORT_ATTRIBUTES = {
    "createdAt": "created_at",
    "price": "price",
    "bedrooms": "bedrooms",
}


def _value(enum_or_none) -> Optional[str]:
    return enum_or_none.value if enum_or_none is not None else None


@dataclass(frozen=True)
class SearchPredicate:
    """Условия отбора объектов (все через AND, keyword - OR по нескольким полям)"""
    agency_slug: Optional[str] = None
    status: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    min_bedrooms: Optional[int] = None
    max_bedrooms: Optional[int] = None
    property_type: Optional[str] = None
    keyword: Optional[str] = None
    city: Optional[str] = None
    postcode_prefix: Optional[str] = None

    def to_clauses(self) -> list:
        """Условия для Query.filter()"""
        # Публикация и активность агентства проверяются всегда
        agency_filter = Agency.status == AgencyStatus.ACTIVE.value
        if self.agency_slug:
            agency_filter = and_(agency_filter, Agency.slug == self.agency_slug)

        clauses = [
            Property.is_published.is_(True),
            Property.agency.has(agency_filter),
        ]

        if self.status:
            clauses.append(Property.status == self.status)
        if self.min_price is not None:
            clauses.append(Property.price >= self.min_price)
        if self.max_price is not None:
            clauses.append(Property.price <= self.max_price)
        if self.min_bedrooms is not None:
            clauses.append(Property.bedrooms >= self.min_bedrooms)
        if self.max_bedrooms is not None:
            clauses.append(Property.bedrooms <= self.max_bedrooms)
        if self.property_type:
            clauses.append(Property.property_type == self.property_type)
        if self.keyword:
            clauses.append(or_(*(
                getattr(Property, name).icontains(self.keyword, autoescape=True)
                for name in KEYWORD_FIELDS
            )))
        if self.city:
            clauses.append(Property.city.icontains(self.city, autoescape=True))
        if self.postcode_prefix:
            clauses.append(Property.postcode.istartswith(self.postcode_prefix, autoescape=True))

        return clauses

    def matches(self, record: Any) -> bool:
        """Проверяет одну запись (ORM-объект или любой объект с теми же атрибутами)"""
        agency = record.agency
        if not record.is_published or agency is None:
            return False
        if agency.status != AgencyStatus.ACTIVE.value:
            return False
        if self.agency_slug and agency.slug != self.agency_slug:
            return False

        if self.status and record.status != self.status:
            return False
        if self.min_price is not None and record.price < self.min_price:
            return False
        if self.max_price is not None and record.price > self.max_price:
            return False
        if self.min_bedrooms is not None and record.bedrooms < self.min_bedrooms:
            return False
        if self.max_bedrooms is not None and record.bedrooms > self.max_bedrooms:
            return False
        if self.property_type and record.property_type != self.property_type:
            return False

        if self.keyword:
            needle = self.keyword.lower()
            if not any(needle in (getattr(record, name) or "").lower() for name in KEYWORD_FIELDS):
                return False
        if self.city and self.city.lower() not in (record.city or "").lower():
            return False
        if self.postcode_prefix and not (record.postcode or "").upper().startswith(self.postcode_prefix):
            return False

        return True


@dataclass(frozen=True)
class SortSpec:
    """Поле и направление сортировки; при равенстве - id по возрастанию"""
    attribute: str = "created_at"
    descending: bool = True

    def order_by(self) -> list:
        column = getattr(Property, self.attribute)
        return [column.desc() if self.descending else column.asc(), Property.id.asc()]

    def sort_records(self, records: Iterable[Any]) -> List[Any]:
        # Сортировка устойчивая: сначала по id, затем по основному полю
        ordered = sorted(records, key=lambda record: record.id)
        return sorted(ordered, key=lambda record: getattr(record, self.attribute), reverse=self.descending)


def build_predicate(criteria: SearchCriteria) -> SearchPredicate:
    return SearchPredicate(
        agency_slug=criteria.agency_slug,
        status=_value(criteria.status),
        min_price=criteria.min_price,
        max_price=criteria.max_price,
        min_bedrooms=criteria.min_bedrooms,
        max_bedrooms=criteria.max_bedrooms,
        property_type=_value(criteria.property_type),
        keyword=criteria.keyword,
        city=criteria.city,
        postcode_prefix=criteria.postcode.upper() if criteria.postcode else None,
    )


def build_sort(criteria: SearchCriteria) -> SortSpec:
    return SortSpec(
        attribute=SORT_ATTRIBUTES[criteria.sort_by],
        descending=criteria.sort_order == "desc",
    )


def page_window(criteria: SearchCriteria) -> Tuple[int, int]:
    """(offset, limit) для текущей страницы"""
    return (criteria.page - 1) * criteria.limit, criteria.limit
