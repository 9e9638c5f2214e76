import logging
from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.db.repositories.canvas_repository import CanvasRepository
from taskboard.domains.canvases.entities import Canvas, normalize_canvas_name

logger = logging.getLogger(__name__)


class CanvasService:
    """Сервис для работы с холстами владельца"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.canvas_repository = CanvasRepository(session)

    async def list_canvases(self, owner_id: str) -> List[Canvas]:
        """Холсты пользователя, последние измененные первыми"""
        return await self.canvas_repository.get_by_owner(owner_id)

    async def create_canvas(self, owner_id: str, name: Optional[str] = None) -> Canvas:
        """Создание нового холста"""
        canvas = Canvas.create_canvas(owner_id, name)
        created = await self.canvas_repository.create(canvas)
        logger.info(f"User {owner_id} created canvas {created.id}")
        return created

    async def get_canvas(self, owner_id: str, canvas_id: str) -> Canvas:
        """Холст владельца; чужой и отсутствующий дают одинаковую ошибку"""
        canvas = await self.canvas_repository.get_owned(canvas_id, owner_id)
        if canvas is None:
            raise NotFoundError("Canvas not found")
        return canvas

    async def rename_canvas(self, owner_id: str, canvas_id: str, name: Optional[str]) -> Canvas:
        """Переименование холста"""
        new_name = normalize_canvas_name(name)
        if not new_name:
            raise ValidationError("Name is required")

        canvas = await self.canvas_repository.rename(canvas_id, owner_id, new_name)
        if canvas is None:
            raise NotFoundError("Canvas not found")

        return canvas

    async def delete_canvas(self, owner_id: str, canvas_id: str) -> None:
        """Удаление холста вместе с узлами и ссылками"""
        deleted = await self.canvas_repository.delete(canvas_id, owner_id)
        if not deleted:
            raise NotFoundError("Canvas not found")
        logger.info(f"User {owner_id} deleted canvas {canvas_id}")

    async def touch(self, canvas_id: str, scope) -> bool:
        """Обновление updated_at после замены узлов"""
        return await self.canvas_repository.touch(canvas_id, scope)
