from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.db import get_db
from taskboard.core.errors import AuthenticationError
from taskboard.domains.identity.entities import User
from taskboard.domains.identity.services import IdentityService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Зависимость для получения текущего пользователя по Bearer токену"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token not provided")

    identity_service = IdentityService(db)
    return await identity_service.get_current_user_from_token(credentials.credentials)
