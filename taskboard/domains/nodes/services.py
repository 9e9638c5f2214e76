import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import AuthorizationError, ValidationError
from taskboard.db.repositories.canvas_repository import CanvasRepository
from taskboard.db.repositories.node_repository import NodeRepository
from taskboard.domains.access import CanvasAccess
from taskboard.domains.nodes.entities import TaskNode, NodeSnapshot, PRIORITIES
from taskboard.domains.nodes.tree import find_cycle

logger = logging.getLogger(__name__)


class NodeService:
    """Чтение узлов холста и полная замена снимка (replaceCanvasNodes)"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.node_repository = NodeRepository(session)
        self.canvas_repository = CanvasRepository(session)

    async def list_canvas_nodes(self, access: CanvasAccess) -> List[TaskNode]:
        """Узлы холста в порядке вставки"""
        return await self.node_repository.get_by_canvas(access.canvas_id, access.read_scope())

    async def replace_canvas_nodes(self, access: CanvasAccess, nodes: List[TaskNode]) -> int:
        """Атомарная замена всех узлов холста присланным снимком.

        Конкурентные замены одного холста разрешаются по правилу
        "последний записавший побеждает": слияния и обнаружения
        конфликтов нет.
        """
        if not access.can_edit:
            raise AuthorizationError("Read-only link")

        snapshot = self.build_snapshot(access.canvas_id, nodes)
        saved = await self.node_repository.replace_all(snapshot, access.write_scope())
        await self.canvas_repository.touch(access.canvas_id, access.write_scope())

        logger.info(f"Replaced nodes of canvas {access.canvas_id}: {saved} saved via {access!r}")
        return saved

    def build_snapshot(self, canvas_id: str, nodes: List[TaskNode]) -> NodeSnapshot:
        """Проверка снимка перед заменой"""
        for node in nodes:
            if not isinstance(node.id, str) or not node.id:
                raise ValidationError("Invalid node id")
            if node.priority not in PRIORITIES:
                raise ValidationError("Invalid priority")

        snapshot = NodeSnapshot(canvas_id, nodes)

        duplicates = snapshot.duplicate_ids()
        if duplicates:
            raise ValidationError(f"Duplicate node id: {duplicates[0]}")

        # ссылки на узлы вне снимка (в том числе с других холстов) не сохраняются
        detached = snapshot.detach_dangling_parents()
        if detached:
            logger.debug(f"Detached {detached} nodes with unknown parents on canvas {canvas_id}")

        cyclic = find_cycle(snapshot.nodes)
        if cyclic is not None:
            raise ValidationError(f"Parent cycle at node: {cyclic}")

        return snapshot
