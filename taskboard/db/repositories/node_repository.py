import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, delete, and_
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.errors import InternalError, NotFoundError
from taskboard.core.timeutils import utcnow
from taskboard.db.models.canvas import Canvas as CanvasModel
from taskboard.db.models.node import Node as NodeModel
from taskboard.domains.nodes.entities import TaskNode, NodeSnapshot

logger = logging.getLogger(__name__)


class NodeRepository:
    """Репозиторий узлов: чтение и полная замена снимка холста"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_canvas(self, canvas_id: str, scope) -> List[TaskNode]:
        """Узлы холста в порядке вставки последнего снимка"""
        result = await self.session.execute(
            select(NodeModel)
            .where(and_(NodeModel.canvas_id == canvas_id, NodeModel.canvas_id.in_(scope)))
            .order_by(NodeModel.seq.asc(), NodeModel.created_at.asc())
            .execution_options(populate_existing=True)
        )
        db_nodes = result.scalars().all()
        return [self._to_domain(node) for node in db_nodes]

    async def replace_all(self, snapshot: NodeSnapshot, scope) -> int:
        """Атомарная замена всех узлов холста.

        Удаление старых строк и вставка новых идут в одной транзакции:
        читатель видит либо прежний снимок, либо новый целиком. ``scope``
        это подзапрос id холстов, доступных вызывающему; он входит в
        условия запросов, а не проверяется только в коде сервиса.
        """
        canvas_id = snapshot.canvas_id

        try:
            result = await self.session.execute(
                select(CanvasModel.id).where(
                    and_(CanvasModel.id == canvas_id, CanvasModel.id.in_(scope))
                )
            )
            if result.scalar_one_or_none() is None:
                await self.session.rollback()
                raise NotFoundError("Canvas not found")

            await self.session.execute(
                delete(NodeModel)
                .where(and_(NodeModel.canvas_id == canvas_id, NodeModel.canvas_id.in_(scope)))
                .execution_options(synchronize_session=False)
            )

            if len(snapshot):
                now = utcnow()
                await self.session.execute(
                    insert(NodeModel),
                    [self._to_row(node, now) for node in snapshot.nodes]
                )

            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to replace nodes of canvas {canvas_id}: {e}")
            raise InternalError() from e

        return len(snapshot)

    def _to_row(self, node: TaskNode, now) -> dict:
        return {
            "canvas_id": node.canvas_id,
            "id": node.id,
            "title": node.title,
            "x": node.x,
            "y": node.y,
            "priority": node.priority,
            "completed": node.completed,
            "parent_id": node.parent_id,
            "due_date": node.due_date,
            "seq": node.seq,
            "created_at": now,
            "updated_at": now,
        }

    def _to_domain(self, db_node: NodeModel) -> TaskNode:
        """Преобразование модели БД в доменную сущность"""
        return TaskNode(
            id=db_node.id,
            canvas_id=db_node.canvas_id,
            title=db_node.title or "",
            x=db_node.x or 0.0,
            y=db_node.y or 0.0,
            priority=db_node.priority,
            completed=bool(db_node.completed),
            parent_id=db_node.parent_id,
            due_date=db_node.due_date,
            seq=db_node.seq,
            created_at=db_node.created_at,
            updated_at=db_node.updated_at
        )
