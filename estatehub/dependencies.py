"""
Проверки доступа для роутов кабинета и админки.

Сессии и логин живут вне сервиса: текущий пользователь приходит
в заголовке X-User-Id от фронтового слоя авторизации.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from estatehub.database import get_db
from estatehub.models import User

logger = logging.getLogger(__name__)


def get_current_user(
    x_user_id: Optional[int] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Требуется авторизация")

    user = db.query(User).filter(User.id == x_user_id).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Требуется авторизация")
    return user


def require_agency_user(user: User = Depends(get_current_user)) -> User:
    """Сотрудник агентства (администратор платформы без агентства не проходит)"""
    if user.agency_id is None:
        raise HTTPException(status_code=401, detail="Требуется авторизация сотрудника агентства")
    return user


def require_platform_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_platform_admin:
        raise HTTPException(status_code=401, detail="Требуются права администратора платформы")
    return user


def get_optional_user(
    x_user_id: Optional[int] = Header(None),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Текущий пользователь или None для анонимного посетителя"""
    if x_user_id is None:
        return None
    user = db.query(User).filter(User.id == x_user_id).first()
    if not user or not user.is_active:
        return None
    return user


def has_agency_access(user: Optional[User], agency_id: int) -> bool:
    """Доступ к данным агентства есть у его сотрудников и у администратора платформы"""
    if user is None:
        return False
    return user.is_platform_admin or (user.agency_id is not None and user.agency_id == agency_id)


def ensure_agency_access(user: User, agency_id: int) -> None:
    if not has_agency_access(user, agency_id):
        logger.warning(f"User {user.id} denied access to agency {agency_id}")
        raise HTTPException(status_code=403, detail="Нет доступа к данным другого агентства")
