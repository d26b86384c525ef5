import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from estatehub.config import get_settings
from estatehub.database import get_db
from estatehub.dependencies import get_current_user
from estatehub.exceptions import NotFoundError
from estatehub.models import Agency, User
from estatehub.models.enums import UserRole
from estatehub.schemas.search import Pagination
from estatehub.schemas.user import (
    UserInvite, UserUpdate, UserResponse, UserInviteResponse, UserListResponse, ADMIN_ONLY_FIELDS
)
from estatehub.services.passwords import hash_password, generate_temp_password

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)
settings = get_settings()


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("Пользователь не найден")
    return user


def _is_agency_admin(user: User) -> bool:
    return user.role == UserRole.AGENCY_ADMIN.value and user.agency_id is not None


def _manages(user: User, target: User) -> bool:
    """Администратор платформы или администратор агентства этого пользователя"""
    if user.is_platform_admin:
        return True
    return _is_agency_admin(user) and user.agency_id == target.agency_id


def _ensure_can_access(user: User, target: User) -> None:
    if user.id != target.id and not _manages(user, target):
        logger.warning(f"User {user.id} denied access to user {target.id}")
        raise HTTPException(status_code=403, detail="Нет доступа к этому пользователю")


@router.get("", response_model=UserListResponse)
def get_users(
    agency_id: Optional[int] = Query(None, alias="agencyId"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.users_default_limit, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Список пользователей.
    Администратор платформы видит всех (можно отфильтровать по agencyId),
    администратор агентства - только своих сотрудников.
    """
    query = db.query(User)
    if user.is_platform_admin:
        if agency_id is not None:
            query = query.filter(User.agency_id == agency_id)
    elif _is_agency_admin(user):
        query = query.filter(User.agency_id == user.agency_id)
    else:
        raise HTTPException(status_code=403, detail="Список пользователей доступен только администраторам")

    total = query.count()
    users = query.order_by(User.created_at.desc(), User.id.desc())\
        .offset((page - 1) * limit)\
        .limit(limit)\
        .all()

    return UserListResponse(data=users, pagination=Pagination.build(page, limit, total))


@router.post("", response_model=UserInviteResponse, status_code=201)
def invite_user(
    invite: UserInvite,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Пригласить сотрудника: создается учетная запись с временным паролем"""
    if not user.is_platform_admin and not _is_agency_admin(user):
        raise HTTPException(status_code=403, detail="Приглашать пользователей могут только администраторы")

    agency_id = invite.agency_id if user.is_platform_admin else user.agency_id
    if agency_id is None:
        raise HTTPException(status_code=400, detail="Не указано агентство")
    agency = db.query(Agency).filter(Agency.id == agency_id).first()
    if not agency:
        raise NotFoundError("Агентство не найдено")

    if db.query(User.id).filter(User.email == invite.email).first():
        raise HTTPException(status_code=400, detail="Пользователь с таким email уже существует")

    users_count = db.query(func.count(User.id))\
        .filter(User.agency_id == agency.id)\
        .scalar()
    if users_count >= agency.max_users:
        raise HTTPException(
            status_code=400,
            detail=f"Достигнут лимит тарифа: {agency.max_users} пользователей"
        )

    temp_password = generate_temp_password()
    new_user = User(
        email=invite.email,
        name=invite.name,
        password_hash=hash_password(temp_password),
        role=invite.role,
        agency_id=agency.id,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"User {new_user.id} invited to agency {agency.id} by user {user.id}")
    response = UserInviteResponse.model_validate(new_user)
    if settings.debug:
        response.temp_password = temp_password
    return response


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Получить пользователя по ID"""
    target = _get_user_or_404(db, user_id)
    _ensure_can_access(user, target)
    return target


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Обновить пользователя. Свой профиль редактирует любой, роль и активность - администратор"""
    target = _get_user_or_404(db, user_id)
    _ensure_can_access(user, target)

    update_data = user_update.model_dump(exclude_unset=True)
    forbidden = ADMIN_ONLY_FIELDS.intersection(update_data)
    if forbidden and not _manages(user, target):
        raise HTTPException(status_code=403, detail="Роль и активность меняет администратор")
    if target.is_platform_admin and "role" in update_data:
        raise HTTPException(status_code=400, detail="Роль администратора платформы не меняется")

    password = update_data.pop("password", None)
    if password:
        target.password_hash = hash_password(password)

    for key, value in update_data.items():
        if value is None:
            continue
        setattr(target, key, value)

    db.commit()
    db.refresh(target)
    return target


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    permanent: bool = False,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """По умолчанию пользователь деактивируется, permanent=true удаляет его (только администратор платформы)"""
    target = _get_user_or_404(db, user_id)
    if not _manages(user, target):
        raise HTTPException(status_code=403, detail="Удалять пользователей могут только администраторы")
    if target.id == user.id:
        raise HTTPException(status_code=400, detail="Нельзя удалить собственную учетную запись")

    if permanent and user.is_platform_admin:
        db.delete(target)
        db.commit()
        logger.warning(f"User {user_id} permanently deleted by admin {user.id}")
        return {"success": True, "deleted": True}

    target.is_active = False
    db.commit()
    logger.info(f"User {user_id} deactivated by user {user.id}")
    return {"success": True, "deleted": False}
