import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from estatehub.config import get_settings
from estatehub.database import get_db
from estatehub.dependencies import get_current_user, require_platform_admin, ensure_agency_access
from estatehub.exceptions import NotFoundError
from estatehub.models import Agency, Enquiry, Property, User
from estatehub.models.enums import AgencyStatus, UserRole
from estatehub.schemas.agency import (
    AgencyCreate, AgencyUpdate, AgencyResponse, AgencyListResponse, AgencyCounts, ADMIN_ONLY_FIELDS
)
from estatehub.schemas.search import Pagination
from estatehub.services.passwords import hash_password

router = APIRouter(prefix="/api/agencies", tags=["agencies"])
logger = logging.getLogger(__name__)
settings = get_settings()

# NOT NULL колонки: null в PUT для них игнорируется
REQUIRED_FIELDS = {
    "name", "email", "primary_color", "secondary_color", "accent_color",
    "status", "max_properties", "max_users", "plan_tier",
}


def _get_agency_or_404(db: Session, agency_id: int) -> Agency:
    agency = db.query(Agency).filter(Agency.id == agency_id).first()
    if not agency:
        raise NotFoundError("Агентство не найдено")
    return agency


def _count_by_agency(db: Session, column, agency_ids) -> dict:
    rows = db.query(column, func.count())\
        .filter(column.in_(agency_ids))\
        .group_by(column)\
        .all()
    return dict(rows)


def _with_counts(db: Session, agencies) -> list:
    """Агентства со счетчиками объектов, пользователей и заявок (три group by вместо N запросов)"""
    agency_ids = [agency.id for agency in agencies]
    if not agency_ids:
        return []

    properties = _count_by_agency(db, Property.agency_id, agency_ids)
    users = _count_by_agency(db, User.agency_id, agency_ids)
    enquiries = _count_by_agency(db, Enquiry.agency_id, agency_ids)

    result = []
    for agency in agencies:
        response = AgencyResponse.model_validate(agency)
        response.counts = AgencyCounts(
            properties=properties.get(agency.id, 0),
            users=users.get(agency.id, 0),
            enquiries=enquiries.get(agency.id, 0),
        )
        result.append(response)
    return result


@router.get("", response_model=AgencyListResponse)
def get_agencies(
    status: Optional[AgencyStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.agencies_default_limit, ge=1, le=100),
    admin: User = Depends(require_platform_admin),
    db: Session = Depends(get_db)
):
    """Список агентств платформы"""
    query = db.query(Agency)
    if status:
        query = query.filter(Agency.status == status.value)

    total = query.count()
    agencies = query.order_by(Agency.created_at.desc(), Agency.id.desc())\
        .offset((page - 1) * limit)\
        .limit(limit)\
        .all()

    return AgencyListResponse(
        data=_with_counts(db, agencies),
        pagination=Pagination.build(page, limit, total)
    )


@router.post("", response_model=AgencyResponse, status_code=201)
def create_agency(
    agency_data: AgencyCreate,
    admin: User = Depends(require_platform_admin),
    db: Session = Depends(get_db)
):
    """
    Создать агентство и его администратора.
    Агентство сразу активно, обе записи создаются в одной транзакции.
    """
    if db.query(Agency.id).filter(Agency.slug == agency_data.slug).first():
        raise HTTPException(status_code=400, detail="Агентство с таким slug уже существует")
    if db.query(User.id).filter(User.email == agency_data.admin_email).first():
        raise HTTPException(status_code=400, detail="Пользователь с таким email уже существует")

    agency = Agency(
        name=agency_data.name,
        slug=agency_data.slug,
        email=agency_data.email,
        phone=agency_data.phone,
        status=AgencyStatus.ACTIVE.value,
        max_properties=agency_data.max_properties,
        max_users=agency_data.max_users,
        plan_tier=agency_data.plan_tier,
    )
    db.add(agency)
    db.flush()

    db.add(User(
        email=agency_data.admin_email,
        name=agency_data.admin_name,
        password_hash=hash_password(agency_data.admin_password),
        role=UserRole.AGENCY_ADMIN.value,
        agency_id=agency.id,
    ))
    db.commit()
    db.refresh(agency)

    logger.info(f"Agency {agency.id} '{agency.slug}' created by admin {admin.id}")
    return _with_counts(db, [agency])[0]


@router.get("/{agency_id}", response_model=AgencyResponse)
def get_agency(
    agency_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Получить агентство по ID"""
    ensure_agency_access(user, agency_id)
    agency = _get_agency_or_404(db, agency_id)
    return _with_counts(db, [agency])[0]


@router.put("/{agency_id}", response_model=AgencyResponse)
def update_agency(
    agency_id: int,
    agency_update: AgencyUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Обновить профиль и брендинг агентства"""
    ensure_agency_access(user, agency_id)
    if not user.is_platform_admin and user.role != UserRole.AGENCY_ADMIN.value:
        raise HTTPException(status_code=403, detail="Настройки агентства меняет его администратор")
    agency = _get_agency_or_404(db, agency_id)

    update_data = agency_update.model_dump(exclude_unset=True, mode="json")
    forbidden = ADMIN_ONLY_FIELDS.intersection(update_data)
    if forbidden and not user.is_platform_admin:
        raise HTTPException(status_code=403, detail="Статус и тариф меняет только администратор платформы")

    for key, value in update_data.items():
        if value is None and key in REQUIRED_FIELDS:
            continue
        setattr(agency, key, value)

    db.commit()
    db.refresh(agency)
    return _with_counts(db, [agency])[0]


@router.delete("/{agency_id}")
def delete_agency(
    agency_id: int,
    permanent: bool = False,
    admin: User = Depends(require_platform_admin),
    db: Session = Depends(get_db)
):
    """По умолчанию агентство приостанавливается, permanent=true удаляет его со всеми данными"""
    agency = _get_agency_or_404(db, agency_id)

    if permanent:
        db.delete(agency)
        db.commit()
        logger.warning(f"Agency {agency_id} permanently deleted by admin {admin.id}")
        return {"success": True, "deleted": True}

    agency.status = AgencyStatus.SUSPENDED.value
    db.commit()
    logger.info(f"Agency {agency_id} suspended by admin {admin.id}")
    return {"success": True, "deleted": False}
