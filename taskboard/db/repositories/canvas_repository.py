from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_
from sqlalchemy.exc import IntegrityError

from taskboard.core.errors import NotFoundError
from taskboard.core.timeutils import utcnow
from taskboard.db.models.canvas import Canvas as CanvasModel
from taskboard.db.models.node import Node as NodeModel
from taskboard.db.models.share import Share as ShareModel
from taskboard.domains.canvases.entities import Canvas


def owned_canvas_ids(owner_id: str):
    """Подзапрос id холстов владельца, условие владения для всех запросов на запись"""
    return select(CanvasModel.id).where(CanvasModel.user_id == owner_id)


class CanvasRepository:
    """Репозиторий для работы с холстами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, canvas: Canvas) -> Canvas:
        """Создание нового холста"""
        db_canvas = CanvasModel(
            id=canvas.id,
            user_id=canvas.user_id,
            name=canvas.name,
            created_at=canvas.created_at,
            updated_at=canvas.updated_at
        )

        self.session.add(db_canvas)
        try:
            await self.session.commit()
            await self.session.refresh(db_canvas)
            return self._to_domain(db_canvas)
        except IntegrityError:
            await self.session.rollback()
            raise NotFoundError("User not found")

    async def get_owned(self, canvas_id: str, owner_id: str) -> Optional[Canvas]:
        """Холст по id, только если он принадлежит владельцу"""
        result = await self.session.execute(
            select(CanvasModel).where(
                and_(
                    CanvasModel.id == canvas_id,
                    CanvasModel.user_id == owner_id
                )
            )
        )
        db_canvas = result.scalar_one_or_none()
        return self._to_domain(db_canvas) if db_canvas else None

    async def get_by_id(self, canvas_id: str) -> Optional[Canvas]:
        """Холст по id без проверки владельца (доступ по ссылке)"""
        result = await self.session.execute(
            select(CanvasModel).where(CanvasModel.id == canvas_id)
        )
        db_canvas = result.scalar_one_or_none()
        return self._to_domain(db_canvas) if db_canvas else None

    async def get_by_owner(self, owner_id: str) -> List[Canvas]:
        """Холсты владельца, последние измененные первыми"""
        result = await self.session.execute(
            select(CanvasModel)
            .where(CanvasModel.user_id == owner_id)
            .order_by(CanvasModel.updated_at.desc(), CanvasModel.created_at.desc())
        )
        db_canvases = result.scalars().all()
        return [self._to_domain(canvas) for canvas in db_canvases]

    async def rename(self, canvas_id: str, owner_id: str, name: str) -> Optional[Canvas]:
        """Переименование холста владельцем"""
        stmt = (
            update(CanvasModel)
            .where(
                and_(
                    CanvasModel.id == canvas_id,
                    CanvasModel.user_id == owner_id
                )
            )
            .values(name=name, updated_at=utcnow())
        )

        result = await self.session.execute(stmt)
        await self.session.commit()

        if result.rowcount == 0:
            return None
        return await self.get_owned(canvas_id, owner_id)

    async def delete(self, canvas_id: str, owner_id: str) -> bool:
        """Удаление холста вместе с узлами и ссылками доступа"""
        scope = owned_canvas_ids(owner_id)

        await self.session.execute(
            delete(NodeModel).where(
                and_(NodeModel.canvas_id == canvas_id, NodeModel.canvas_id.in_(scope))
            )
        )
        await self.session.execute(
            delete(ShareModel).where(
                and_(ShareModel.canvas_id == canvas_id, ShareModel.canvas_id.in_(scope))
            )
        )
        result = await self.session.execute(
            delete(CanvasModel).where(
                and_(
                    CanvasModel.id == canvas_id,
                    CanvasModel.user_id == owner_id
                )
            )
        )

        if result.rowcount == 0:
            await self.session.rollback()
            return False

        await self.session.commit()
        return True

    async def touch(self, canvas_id: str, scope) -> bool:
        """Отметка об изменении набора узлов холста в пределах доступных вызывающему"""
        stmt = (
            update(CanvasModel)
            .where(and_(CanvasModel.id == canvas_id, CanvasModel.id.in_(scope)))
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_canvas: CanvasModel) -> Canvas:
        """Преобразование модели БД в доменную сущность"""
        return Canvas(
            id=db_canvas.id,
            user_id=db_canvas.user_id,
            name=db_canvas.name,
            created_at=db_canvas.created_at,
            updated_at=db_canvas.updated_at
        )
