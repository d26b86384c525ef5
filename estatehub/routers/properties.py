import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from estatehub.config import get_settings
from estatehub.database import get_db
from estatehub.dependencies import (
    get_current_user, get_optional_user, require_agency_user, ensure_agency_access, has_agency_access
)
from estatehub.exceptions import NotFoundError, ValidationError
from estatehub.models import Enquiry, Property, PropertyImage, User
from estatehub.schemas.property import (
    PropertyCreate, PropertyDetail, PropertyUpdate,
    PropertyImageCreate, PropertyImageReorder, PropertyImageResponse
)
from estatehub.schemas.search import PropertySearchResponse
from estatehub.services.search import PropertySearchService, SearchCriteria, SqlAlchemyPropertyStore
from estatehub.services.slugs import unique_property_slug, random_suffix

router = APIRouter(prefix="/api/properties", tags=["properties"])
logger = logging.getLogger(__name__)
settings = get_settings()

# Поля, которые можно очистить через PUT (остальные NOT NULL)
NULLABLE_FIELDS = {"address_line2", "county"}


def _get_property_or_404(db: Session, property_id: int) -> Property:
    property_obj = db.query(Property)\
        .options(joinedload(Property.agency), selectinload(Property.images))\
        .filter(Property.id == property_id)\
        .first()
    if not property_obj:
        raise NotFoundError("Объект не найден")
    return property_obj


def _to_detail(db: Session, property_obj: Property) -> PropertyDetail:
    detail = PropertyDetail.model_validate(property_obj)
    detail.enquiry_count = db.query(func.count(Enquiry.id))\
        .filter(Enquiry.property_id == property_obj.id)\
        .scalar()
    return detail


@router.get("", response_model=PropertySearchResponse)
def search_properties(request: Request, db: Session = Depends(get_db)):
    """
    Поиск опубликованных объектов активных агентств.

    Параметры: status, minPrice, maxPrice, minBedrooms, maxBedrooms,
    propertyType, keyword, city, postcode, agencySlug, page, limit,
    sortBy (createdAt|price|bedrooms), sortOrder (asc|desc)
    """
    criteria = SearchCriteria.from_query_params(request.query_params)
    service = PropertySearchService(SqlAlchemyPropertyStore(db))
    return service.search(criteria)


@router.post("", response_model=PropertyDetail, status_code=201)
def create_property(
    property_data: PropertyCreate,
    user: User = Depends(require_agency_user),
    db: Session = Depends(get_db)
):
    """Создать объект в агентстве текущего пользователя"""
    agency = user.agency
    properties_count = db.query(func.count(Property.id))\
        .filter(Property.agency_id == agency.id)\
        .scalar()
    if properties_count >= agency.max_properties:
        raise HTTPException(
            status_code=400,
            detail=f"Достигнут лимит тарифа: {agency.max_properties} объектов"
        )

    data = property_data.model_dump(mode="json")
    slug = unique_property_slug(db, user.agency_id, property_data.title)
    agency_id = user.agency_id

    for attempt in range(settings.slug_max_attempts):
        # Slug могли занять параллельным запросом между проверкой и вставкой
        candidate = slug if attempt == 0 else f"{slug}-{random_suffix()}"
        property_obj = Property(**data, slug=candidate, agency_id=agency_id)
        if property_obj.is_published:
            property_obj.published_at = datetime.now(timezone.utc)

        db.add(property_obj)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            logger.warning(f"Slug '{candidate}' taken on insert in agency {agency_id}, retrying")
    else:
        raise HTTPException(status_code=409, detail="Не удалось подобрать уникальный slug, повторите запрос")

    db.refresh(property_obj)
    logger.info(f"Property {property_obj.id} '{property_obj.slug}' created in agency {user.agency_id}")
    return _to_detail(db, property_obj)


@router.get("/{property_id}", response_model=PropertyDetail)
def get_property(
    property_id: int,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    Получить объект по ID.
    Посетителям виден только опубликованный объект активного агентства,
    сотрудникам агентства и администратору платформы - любой.
    """
    property_obj = _get_property_or_404(db, property_id)
    if has_agency_access(user, property_obj.agency_id):
        return _to_detail(db, property_obj)
    if not property_obj.is_published or not property_obj.agency.is_active:
        raise NotFoundError("Объект не найден")
    return _to_detail(db, property_obj)


@router.put("/{property_id}", response_model=PropertyDetail)
def update_property(
    property_id: int,
    property_update: PropertyUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Обновить объект"""
    property_obj = _get_property_or_404(db, property_id)
    ensure_agency_access(user, property_obj.agency_id)

    update_data = property_update.model_dump(exclude_unset=True, mode="json")
    for key, value in update_data.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(property_obj, key, value)

    # Дата первой публикации
    if property_obj.is_published and property_obj.published_at is None:
        property_obj.published_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(property_obj)
    return _to_detail(db, property_obj)


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Удалить объект"""
    property_obj = _get_property_or_404(db, property_id)
    ensure_agency_access(user, property_obj.agency_id)

    db.delete(property_obj)
    db.commit()
    logger.info(f"Property {property_id} deleted by user {user.id}")
    return {"success": True}


@router.post("/{property_id}/images", response_model=List[PropertyImageResponse], status_code=201)
def add_images(
    property_id: int,
    payload: Union[List[PropertyImageCreate], PropertyImageCreate],
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Добавить одно или несколько фото в конец галереи"""
    property_obj = _get_property_or_404(db, property_id)
    ensure_agency_access(user, property_obj.agency_id)

    images = payload if isinstance(payload, list) else [payload]
    last_sort_order = db.query(func.max(PropertyImage.sort_order))\
        .filter(PropertyImage.property_id == property_id)\
        .scalar() or 0

    created = []
    for position, image in enumerate(images, start=1):
        image_obj = PropertyImage(
            property_id=property_id,
            url=image.url,
            alt_text=image.alt_text,
            caption=image.caption,
            sort_order=last_sort_order + position,
            is_primary=image.is_primary,
        )
        db.add(image_obj)
        created.append(image_obj)
    db.flush()

    # Главное фото у объекта одно
    new_primary = next((image for image in created if image.is_primary), None)
    if new_primary:
        db.query(PropertyImage).filter(
            PropertyImage.property_id == property_id,
            PropertyImage.id != new_primary.id
        ).update({"is_primary": False}, synchronize_session="fetch")

    db.commit()
    for image_obj in created:
        db.refresh(image_obj)
    return created


@router.put("/{property_id}/images", response_model=List[PropertyImageResponse])
def reorder_images(
    property_id: int,
    reorder: PropertyImageReorder,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Изменить порядок фото: позиция в списке imageIds = новый sort_order"""
    property_obj = _get_property_or_404(db, property_id)
    ensure_agency_access(user, property_obj.agency_id)

    images_by_id = {
        image.id: image
        for image in db.query(PropertyImage).filter(PropertyImage.property_id == property_id).all()
    }
    unknown = [image_id for image_id in reorder.image_ids if image_id not in images_by_id]
    if unknown:
        raise ValidationError("imageIds", f"Фото {unknown} не принадлежат объекту {property_id}")

    for index, image_id in enumerate(reorder.image_ids):
        images_by_id[image_id].sort_order = index

    db.commit()
    return sorted(images_by_id.values(), key=lambda image: image.sort_order)
