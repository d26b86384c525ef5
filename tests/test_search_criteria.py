from decimal import Decimal

import pytest

from estatehub.exceptions import ValidationError
from estatehub.models.enums import PropertyStatus, PropertyType
from estatehub.services.search import SearchCriteria, build_predicate, build_sort, page_window


def test_defaults():
    criteria = SearchCriteria.from_query_params({})
    assert criteria.page == 1
    assert criteria.limit == 12
    assert criteria.sort_by == "createdAt"
    assert criteria.sort_order == "desc"
    assert criteria.status is None
    assert criteria.property_type is None


def test_parses_camel_case_params():
    criteria = SearchCriteria.from_query_params({
        "status": "TO_RENT",
        "minPrice": "1000",
        "maxPrice": "2500.50",
        "minBedrooms": "2",
        "maxBedrooms": "4",
        "propertyType": "FLAT",
        "keyword": "  garden  ",
        "agencySlug": "acme",
        "page": "3",
        "limit": "24",
        "sortBy": "price",
        "sortOrder": "asc",
    })
    assert criteria.status == PropertyStatus.TO_RENT
    assert criteria.min_price == Decimal("1000")
    assert criteria.max_price == Decimal("2500.50")
    assert criteria.min_bedrooms == 2
    assert criteria.max_bedrooms == 4
    assert criteria.property_type == PropertyType.FLAT
    assert criteria.keyword == "garden"
    assert criteria.agency_slug == "acme"
    assert (criteria.page, criteria.limit) == (3, 24)
    assert (criteria.sort_by, criteria.sort_order) == ("price", "asc")


def test_blank_values_are_absent():
    criteria = SearchCriteria.from_query_params({"minPrice": "", "keyword": "   ", "status": ""})
    assert criteria.min_price is None
    assert criteria.keyword is None
    assert criteria.status is None


def test_property_type_all_means_no_filter():
    assert SearchCriteria.from_query_params({"propertyType": "all"}) == SearchCriteria.from_query_params({})
    assert SearchCriteria.from_query_params({"propertyType": "ALL"}).property_type is None


def test_property_type_is_case_insensitive():
    assert SearchCriteria.from_query_params({"propertyType": "flat"}).property_type == PropertyType.FLAT


def test_postcode_is_uppercased():
    assert SearchCriteria.from_query_params({"postcode": " sw1 "}).postcode == "SW1"


def test_criteria_are_immutable():
    criteria = SearchCriteria.from_query_params({})
    with pytest.raises(Exception):
        criteria.page = 2


@pytest.mark.parametrize("params, field", [
    ({"sortBy": "title"}, "sortBy"),
    ({"sortOrder": "up"}, "sortOrder"),
    ({"status": "SOLD"}, "status"),
    ({"propertyType": "castle"}, "propertyType"),
    ({"limit": "0"}, "limit"),
    ({"limit": "101"}, "limit"),
    ({"page": "0"}, "page"),
    ({"minPrice": "cheap"}, "minPrice"),
    ({"maxPrice": "-1"}, "maxPrice"),
    ({"minBedrooms": "two"}, "minBedrooms"),
])
def test_invalid_values_raise_validation_error(params, field):
    with pytest.raises(ValidationError) as exc_info:
        SearchCriteria.from_query_params(params)
    assert exc_info.value.field == field


def test_min_price_above_max_price_is_allowed():
    criteria = SearchCriteria.from_query_params({"minPrice": "500000", "maxPrice": "100000"})
    predicate = build_predicate(criteria)
    assert predicate.min_price > predicate.max_price


def test_build_predicate_uses_enum_values():
    criteria = SearchCriteria.from_query_params({"status": "FOR_SALE", "propertyType": "HOUSE", "postcode": "e1"})
    predicate = build_predicate(criteria)
    assert predicate.status == "FOR_SALE"
    assert predicate.property_type == "HOUSE"
    assert predicate.postcode_prefix == "E1"


def test_build_sort_maps_wire_names_to_columns():
    sort = build_sort(SearchCriteria.from_query_params({"sortBy": "createdAt", "sortOrder": "asc"}))
    assert sort.attribute == "created_at"
    assert sort.descending is False


def test_page_window():
    criteria = SearchCriteria.from_query_params({"page": "3", "limit": "10"})
    assert page_window(criteria) == (20, 10)
