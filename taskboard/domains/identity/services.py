import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import AuthenticationError
from taskboard.core.security import create_user_token, decode_access_token
from taskboard.db.repositories.user_repository import UserRepository
from taskboard.domains.canvases.entities import Canvas, DEFAULT_WORKSPACE_NAME
from taskboard.domains.identity.entities import ExternalIdentity, User

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис идентификации: вход через внешнего провайдера и сессии"""

    def __init__(self, session: AsyncSession, verifier=None):
        self.session = session
        self.verifier = verifier
        self.user_repository = UserRepository(session)

    async def login_with_google(self, credential: str) -> Tuple[str, User]:
        """Вход по Google ID токену, возвращает токен сессии и пользователя"""
        identity = await self.verifier.verify(credential)
        user, _ = await self.resolve_identity(identity)
        return create_user_token(user), user

    async def resolve_identity(self, identity: ExternalIdentity) -> Tuple[User, bool]:
        """Поиск или создание пользователя по внешней учетной записи.

        Порядок: по id провайдера, затем по email (привязка учетной записи),
        иначе новый пользователь с холстом по умолчанию.
        Второй элемент результата показывает, был ли пользователь создан.
        """
        user = await self.user_repository.get_by_google_id(identity.subject)
        if user:
            user.update_profile(identity.name, identity.photo)
            return await self.user_repository.update(user), False

        user = await self.user_repository.get_by_email(identity.email)
        if user:
            user.link_google_account(identity.subject)
            user.update_profile(identity.name, identity.photo)
            logger.info(f"Linked Google account to existing user {user.id}")
            return await self.user_repository.update(user), False

        user = User.create_user(identity)
        workspace = Canvas.create_canvas(user.id, DEFAULT_WORKSPACE_NAME)
        created = await self.user_repository.create(user, default_canvas=workspace)
        logger.info(f"Created user {created.id} with default canvas {workspace.id}")
        return created, True

    async def get_user(self, user_id: str) -> Optional[User]:
        """Получение пользователя по id"""
        return await self.user_repository.get_by_id(user_id)

    async def get_current_user_from_token(self, token: str) -> User:
        """Пользователь по токену сессии; удаленный пользователь не проходит"""
        user_id = decode_access_token(token)

        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found")

        return user

    async def set_dark_mode(self, user: User, enabled: bool) -> bool:
        """Сохранение настройки темного режима"""
        user.set_dark_mode(enabled)
        await self.user_repository.set_dark_mode(user.id, user.dark_mode)
        return user.dark_mode
