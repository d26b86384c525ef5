import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload

from estatehub.config import get_settings
from estatehub.database import get_db
from estatehub.dependencies import require_agency_user, get_current_user, ensure_agency_access
from estatehub.exceptions import NotFoundError
from estatehub.models import Enquiry, Property, User
from estatehub.models.enums import EnquiryStatus
from estatehub.schemas.enquiry import EnquiryCreate, EnquiryUpdate, EnquiryResponse, EnquiryListResponse
from estatehub.schemas.search import Pagination

router = APIRouter(prefix="/api/enquiries", tags=["enquiries"])
logger = logging.getLogger(__name__)
settings = get_settings()


def _get_enquiry_or_404(db: Session, enquiry_id: int) -> Enquiry:
    enquiry = db.query(Enquiry)\
        .options(joinedload(Enquiry.property))\
        .filter(Enquiry.id == enquiry_id)\
        .first()
    if not enquiry:
        raise NotFoundError("Заявка не найдена")
    return enquiry


@router.post("", response_model=EnquiryResponse, status_code=201)
def create_enquiry(enquiry_data: EnquiryCreate, db: Session = Depends(get_db)):
    """Оставить заявку по объекту (публичный эндпоинт)"""
    property_obj = db.query(Property)\
        .options(joinedload(Property.agency))\
        .filter(Property.id == enquiry_data.property_id)\
        .first()
    if not property_obj:
        raise NotFoundError("Объект не найден")

    if not property_obj.agency.is_active:
        raise HTTPException(status_code=400, detail="Агентство не принимает заявки")

    enquiry = Enquiry(
        property_id=property_obj.id,
        agency_id=property_obj.agency_id,
        name=enquiry_data.name,
        email=enquiry_data.email,
        phone=enquiry_data.phone or None,
        message=enquiry_data.message,
        source="website",
    )
    db.add(enquiry)
    db.commit()
    db.refresh(enquiry)

    logger.info(f"Enquiry {enquiry.id} created for property {property_obj.id}")
    return enquiry


@router.get("", response_model=EnquiryListResponse)
def get_enquiries(
    status: Optional[EnquiryStatus] = None,
    property_id: Optional[int] = Query(None, alias="propertyId"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.enquiries_default_limit, ge=1, le=100),
    user: User = Depends(require_agency_user),
    db: Session = Depends(get_db)
):
    """Заявки агентства текущего пользователя, новые сверху"""
    query = db.query(Enquiry).filter(Enquiry.agency_id == user.agency_id)

    if status:
        query = query.filter(Enquiry.status == status.value)
    if property_id is not None:
        query = query.filter(Enquiry.property_id == property_id)

    total = query.count()
    items = query.options(joinedload(Enquiry.property))\
        .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())\
        .offset((page - 1) * limit)\
        .limit(limit)\
        .all()

    return EnquiryListResponse(
        data=items,
        pagination=Pagination.build(page, limit, total)
    )


@router.get("/{enquiry_id}", response_model=EnquiryResponse)
def get_enquiry(
    enquiry_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Получить заявку по ID"""
    enquiry = _get_enquiry_or_404(db, enquiry_id)
    ensure_agency_access(user, enquiry.agency_id)
    return enquiry


@router.put("/{enquiry_id}", response_model=EnquiryResponse)
def update_enquiry(
    enquiry_id: int,
    enquiry_update: EnquiryUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Обновить статус и внутренние заметки заявки"""
    enquiry = _get_enquiry_or_404(db, enquiry_id)
    ensure_agency_access(user, enquiry.agency_id)

    now = datetime.now(timezone.utc)
    if enquiry_update.status is not None:
        new_status = enquiry_update.status.value
        # Отметки времени ставятся только при переходе в статус
        if new_status == EnquiryStatus.RESPONDED.value and enquiry.status != new_status:
            enquiry.responded_at = now
        if new_status == EnquiryStatus.CLOSED.value and enquiry.status != new_status:
            enquiry.closed_at = now
        enquiry.status = new_status

    if "internal_notes" in enquiry_update.model_fields_set:
        enquiry.internal_notes = enquiry_update.internal_notes

    db.commit()
    db.refresh(enquiry)
    return enquiry


@router.delete("/{enquiry_id}")
def delete_enquiry(
    enquiry_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Удалить заявку"""
    enquiry = _get_enquiry_or_404(db, enquiry_id)
    ensure_agency_access(user, enquiry.agency_id)

    db.delete(enquiry)
    db.commit()
    return {"success": True}
