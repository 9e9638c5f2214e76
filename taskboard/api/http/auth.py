from functools import lru_cache

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import settings
from taskboard.core.auth import get_current_user
from taskboard.core.db import get_db
from taskboard.core.schemas import MessageResponse
from taskboard.domains.identity.entities import User
from taskboard.domains.identity.google import GoogleIdentityVerifier
from taskboard.domains.identity.schemas import (
    GoogleLoginRequest, LoginResponse, UserProfile, DarkModeUpdate, DarkModeResponse
)
from taskboard.domains.identity.services import IdentityService

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@lru_cache
def get_identity_verifier() -> GoogleIdentityVerifier:
    """Зависимость: проверка Google ID токенов (в тестах подменяется)"""
    return GoogleIdentityVerifier(settings.google_client_id)


@router.post("/google", response_model=LoginResponse)
async def login_with_google(
    login_data: GoogleLoginRequest,
    db: AsyncSession = Depends(get_db),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier)
):
    """Вход через Google"""
    identity_service = IdentityService(db, verifier)

    token, user = await identity_service.login_with_google(login_data.credential)

    return LoginResponse(token=token, user=UserProfile(**user.to_profile()))


@router.get("/me", response_model=UserProfile)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Профиль текущего пользователя"""
    return UserProfile(**current_user.to_profile())


@router.patch("/me/darkmode", response_model=DarkModeResponse)
async def update_dark_mode(
    update_data: DarkModeUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Смена настройки темного режима"""
    identity_service = IdentityService(db)

    dark_mode = await identity_service.set_dark_mode(current_user, update_data.dark_mode)

    return DarkModeResponse(dark_mode=dark_mode)


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Выход пользователя: токен просто забывается клиентом, отзыва на сервере нет"""
    return {"message": "Logged out"}
