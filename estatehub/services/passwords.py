import secrets
import string
from typing import Optional

from passlib.context import CryptContext

from estatehub.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_PASSWORD_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Проверка пароля по bcrypt-хешу"""
    return pwd_context.verify(password, password_hash)


def generate_temp_password(length: Optional[int] = None) -> str:
    """Временный пароль для приглашенного пользователя"""
    length = length or settings.temp_password_length
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))
