from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from estatehub.database import get_db
from estatehub.dependencies import require_agency_user
from estatehub.models import Enquiry, Property, User
from estatehub.models.enums import AvailabilityStatus, EnquiryStatus, PropertyStatus
from estatehub.schemas.dashboard import DashboardStats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

RECENT_ENQUIRIES_LIMIT = 5


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    user: User = Depends(require_agency_user),
    db: Session = Depends(get_db)
):
    """Статистика по объектам и заявкам агентства"""
    agency_id = user.agency_id

    status_counts = dict(
        db.query(Property.status, func.count(Property.id))
        .filter(Property.agency_id == agency_id)
        .group_by(Property.status)
        .all()
    )
    availability_counts = dict(
        db.query(Property.availability_status, func.count(Property.id))
        .filter(Property.agency_id == agency_id)
        .group_by(Property.availability_status)
        .all()
    )
    # "Доступно" считаем только по опубликованным объектам
    available = db.query(func.count(Property.id)).filter(
        Property.agency_id == agency_id,
        Property.is_published.is_(True),
        Property.availability_status == AvailabilityStatus.AVAILABLE.value
    ).scalar()

    enquiries = db.query(Enquiry).filter(Enquiry.agency_id == agency_id)
    total_enquiries = enquiries.count()
    new_enquiries = enquiries.filter(Enquiry.status == EnquiryStatus.NEW.value).count()
    recent_enquiries = enquiries.options(joinedload(Enquiry.property))\
        .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())\
        .limit(RECENT_ENQUIRIES_LIMIT)\
        .all()

    return DashboardStats(
        total_properties=sum(status_counts.values()),
        for_sale=status_counts.get(PropertyStatus.FOR_SALE.value, 0),
        to_rent=status_counts.get(PropertyStatus.TO_RENT.value, 0),
        available=available,
        under_offer=availability_counts.get(AvailabilityStatus.UNDER_OFFER.value, 0),
        sold=availability_counts.get(AvailabilityStatus.SOLD.value, 0),
        let_agreed=availability_counts.get(AvailabilityStatus.LET_AGREED.value, 0),
        total_enquiries=total_enquiries,
        new_enquiries=new_enquiries,
        recent_enquiries=recent_enquiries,
    )
