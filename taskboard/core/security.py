import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import ExpiredSignatureError, JWTError, jwt

from taskboard.config import settings
from taskboard.core.errors import AuthenticationError

SHARE_TOKEN_BYTES = 20


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Создание JWT токена доступа"""
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expires_minutes)

    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def create_user_token(user) -> str:
    """Токен сессии для пользователя: id в sub, email и имя для отображения"""
    return create_access_token({"sub": user.id, "email": user.email, "name": user.name})


def decode_access_token(token: str) -> str:
    """Проверка подписи и срока действия, возвращает id пользователя"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except JWTError:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise AuthenticationError("Invalid token")

    return user_id


def generate_share_token() -> str:
    """Неугадываемый токен ссылки доступа к холсту"""
    return secrets.token_hex(SHARE_TOKEN_BYTES)
