from typing import Optional

from pydantic import Field, field_validator

from taskboard.core.schemas import CamelModel


class GoogleLoginRequest(CamelModel):
    """Схема входа через Google: ID токен из Google Identity Services"""
    credential: str = Field(..., min_length=1)

    @field_validator('credential')
    @classmethod
    def validate_credential(cls, v):
        if not v.strip():
            raise ValueError('credential is required')
        return v.strip()


class UserProfile(CamelModel):
    """Профиль текущего пользователя"""
    id: str
    name: str
    email: str
    photo: Optional[str] = None
    dark_mode: bool = False


class LoginResponse(CamelModel):
    """Токен сессии и профиль"""
    token: str
    user: UserProfile


class DarkModeUpdate(CamelModel):
    """Схема для смены настройки темного режима"""
    dark_mode: bool = False


class DarkModeResponse(CamelModel):
    dark_mode: bool
