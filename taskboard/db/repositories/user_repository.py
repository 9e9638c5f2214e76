from typing import Optional, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from taskboard.core.errors import ValidationError
from taskboard.db.models.canvas import Canvas as CanvasModel
from taskboard.db.models.user import User as UserModel
from taskboard.domains.identity.entities import User

if TYPE_CHECKING:
    from taskboard.domains.canvases.entities import Canvas


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User, default_canvas: Optional["Canvas"] = None) -> User:
        """Создание пользователя, вместе с холстом по умолчанию в одной транзакции"""
        db_user = UserModel(
            id=user.id,
            google_id=user.google_id,
            name=user.name,
            email=user.email,
            photo=user.photo,
            dark_mode=user.dark_mode,
            created_at=user.created_at,
            updated_at=user.updated_at
        )
        self.session.add(db_user)

        if default_canvas is not None:
            self.session.add(CanvasModel(
                id=default_canvas.id,
                user_id=user.id,
                name=default_canvas.name,
                created_at=default_canvas.created_at,
                updated_at=default_canvas.updated_at
            ))

        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError("User with this email already exists")

        await self.session.refresh(db_user)
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Получение пользователя по id"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_google_id(self, google_id: str) -> Optional[User]:
        """Получение пользователя по id внешней учетной записи"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.google_id == google_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def update(self, user: User) -> User:
        """Обновление профиля и привязки внешней учетной записи"""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(
                google_id=user.google_id,
                name=user.name,
                photo=user.photo,
                updated_at=user.updated_at
            )
        )

        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError("External account is already linked to another user")

        return await self.get_by_id(user.id)

    async def set_dark_mode(self, user_id: str, enabled: bool) -> bool:
        """Сохранение настройки темного режима"""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(dark_mode=enabled)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            id=db_user.id,
            email=db_user.email,
            name=db_user.name,
            google_id=db_user.google_id,
            photo=db_user.photo,
            dark_mode=bool(db_user.dark_mode),
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )
