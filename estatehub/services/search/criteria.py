"""
Критерии поиска объектов и их разбор из query-параметров запроса
"""
from decimal import Decimal
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from estatehub.config import get_settings
from estatehub.exceptions import ValidationError
from estatehub.models.enums import PropertyStatus, PropertyType

settings = get_settings()

# Значение propertyType, которое фронтенд передает вместо "любой тип"
ALL_PROPERTY_TYPES = "all"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = settings.search_default_limit
MAX_LIMIT = settings.search_max_limit


class SearchCriteria(BaseModel):
    """
    Неизменяемый набор критериев одного поискового запроса.
    Имена полей в JSON/query-строке - camelCase (minPrice, sortBy, ...).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    status: Optional[PropertyStatus] = None
    min_price: Optional[Decimal] = Field(None, ge=0, alias="minPrice")
    max_price: Optional[Decimal] = Field(None, ge=0, alias="maxPrice")
    min_bedrooms: Optional[int] = Field(None, ge=0, alias="minBedrooms")
    max_bedrooms: Optional[int] = Field(None, ge=0, alias="maxBedrooms")
    property_type: Optional[PropertyType] = Field(None, alias="propertyType")
    keyword: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    agency_slug: Optional[str] = Field(None, alias="agencySlug")

    page: int = Field(DEFAULT_PAGE, ge=1)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    sort_by: Literal["createdAt", "price", "bedrooms"] = Field("createdAt", alias="sortBy")
    sort_order: Literal["asc", "desc"] = Field("desc", alias="sortOrder")

    @field_validator("keyword", "city", "agency_slug", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("postcode", mode="before")
    @classmethod
    def normalize_postcode(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            return v or None
        return v

    @field_validator("property_type", mode="before")
    @classmethod
    def normalize_property_type(cls, v):
        # Регистр не важен: "flat" и "FLAT" - один и тот же тип
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "SearchCriteria":
        """
        Собирает критерии из query-параметров.

        Пустые значения считаются отсутствующими, propertyType=all означает
        "без фильтра по типу". Любая ошибка разбора превращается в
        ValidationError с именем параметра.
        """
        data = {}
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            data[key] = value

        property_type = data.get("propertyType", data.get("property_type"))
        if isinstance(property_type, str) and property_type.lower() == ALL_PROPERTY_TYPES:
            data.pop("propertyType", None)
            data.pop("property_type", None)

        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "query"
            raise ValidationError(field, f"Некорректное значение параметра {field}: {error['msg']}") from None
