"""Вспомогательные объекты тестов: заголовок авторизации и in-memory хранилище"""
from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

from estatehub.exceptions import StoreError
from estatehub.models.enums import AgencyStatus

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def auth(user):
    return {"X-User-Id": str(user.id)}


# In-memory хранилище для тестов поиска без базы

class InMemoryPropertyStore:
    """Хранилище поверх списка записей; отбор и сортировка через предикат"""

    def __init__(self, records):
        self.records = list(records)
        self.find_calls = []
        self.marker_calls = 0

    def count(self, predicate):
        return sum(1 for record in self.records if predicate.matches(record))

    def find(self, predicate, sort, offset=0, limit=None):
        self.find_calls.append((offset, limit))
        matched = sort.sort_records(record for record in self.records if predicate.matches(record))
        end = None if limit is None else offset + limit
        return matched[offset:end]

    def find_markers(self, predicate, sort):
        self.marker_calls += 1
        return sort.sort_records(record for record in self.records if predicate.matches(record))


class FailingPropertyStore:
    def count(self, predicate):
        raise StoreError("Не удалось выполнить поиск объектов")

    def find(self, predicate, sort, offset=0, limit=None):
        raise AssertionError("find не должен вызываться после ошибки count")

    def find_markers(self, predicate, sort):
        raise AssertionError("find_markers не должен вызываться после ошибки count")


ACTIVE_AGENCY = SimpleNamespace(
    id=1, name="Acme", slug="acme", logo_url=None, primary_color="#1e3a5f", status=AgencyStatus.ACTIVE.value
)
SUSPENDED_AGENCY = SimpleNamespace(
    id=2, name="Gone", slug="gone", logo_url=None, primary_color="#1e3a5f", status=AgencyStatus.SUSPENDED.value
)


def make_record(id, agency=ACTIVE_AGENCY, **kwargs):
    """Запись объекта с атрибутами как у ORM-модели Property"""
    defaults = dict(
        id=id,
        agency_id=agency.id,
        agency=agency,
        slug=f"property-{id}",
        title=f"Property {id}",
        description="A well presented property close to local amenities.",
        status="FOR_SALE",
        availability_status="AVAILABLE",
        address_line1=f"{id} High Street",
        city="London",
        postcode="SW1A 1AA",
        latitude=51.5,
        longitude=-0.12,
        price=Decimal("300000"),
        price_type="FIXED",
        property_type="HOUSE",
        bedrooms=3,
        bathrooms=1,
        receptions=1,
        key_features=[],
        is_published=True,
        is_featured=False,
        created_at=BASE_TIME + timedelta(days=id),
        images=[],
    )
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_image_record(id, sort_order):
    return SimpleNamespace(
        id=id, url=f"https://img.example.com/{id}.jpg", alt_text=None, caption=None,
        sort_order=sort_order, is_primary=sort_order == 0
    )
