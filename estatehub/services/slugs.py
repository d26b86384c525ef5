import re
import random
import string
import logging
from typing import Optional

from sqlalchemy.orm import Session

from estatehub.config import get_settings
from estatehub.models import Property

logger = logging.getLogger(__name__)
settings = get_settings()

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

FALLBACK_SLUG = "property"


def slugify(text: str) -> str:
    """
    URL-slug из заголовка: нижний регистр, любая последовательность
    не буквенно-цифровых символов -> один дефис, без дефисов по краям
    """
    slug = _NON_ALNUM_RE.sub("-", (text or "").lower()).strip("-")
    return slug or FALLBACK_SLUG


def random_suffix(length: Optional[int] = None) -> str:
    length = length or settings.slug_suffix_length
    return "".join(random.choices(_SUFFIX_ALPHABET, k=length))


def slug_exists(db: Session, agency_id: int, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Property.id).filter(Property.agency_id == agency_id, Property.slug == slug)
    if exclude_id is not None:
        query = query.filter(Property.id != exclude_id)
    return query.first() is not None


def unique_property_slug(db: Session, agency_id: int, title: str) -> str:
    """
    Slug объекта, уникальный в пределах агентства.
    При совпадении добавляет случайный суффикс вместо ошибки.
    """
    base = slugify(title)
    if not slug_exists(db, agency_id, base):
        return base

    for _ in range(settings.slug_max_attempts):
        candidate = f"{base}-{random_suffix()}"
        if not slug_exists(db, agency_id, candidate):
            logger.debug(f"Slug '{base}' taken in agency {agency_id}, using '{candidate}'")
            return candidate

    # Все попытки заняты: суффикс двойной длины
    return f"{base}-{random_suffix(settings.slug_suffix_length * 2)}"
