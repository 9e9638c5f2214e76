import logging
from typing import Optional, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import NotFoundError
from taskboard.db.repositories.share_repository import ShareRepository
from taskboard.domains.access import ShareAccess, resolve_owner_access, resolve_share_access
from taskboard.domains.canvases.entities import Canvas
from taskboard.domains.nodes.entities import TaskNode
from taskboard.domains.nodes.services import NodeService
from taskboard.domains.shares.entities import Share

logger = logging.getLogger(__name__)


class ShareService:
    """Сервис ссылок доступа к холстам"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.share_repository = ShareRepository(session)
        self.node_service = NodeService(session)

    async def list_shares(self, owner_id: str, canvas_id: str) -> List[Share]:
        """Ссылки холста владельца"""
        await resolve_owner_access(self.session, owner_id, canvas_id)
        return await self.share_repository.get_by_canvas(canvas_id, owner_id)

    async def create_share(self, owner_id: str, canvas_id: str, mode: Optional[str] = None) -> Share:
        """Создание ссылки с новым токеном"""
        access = await resolve_owner_access(self.session, owner_id, canvas_id)
        share = await self.share_repository.create(Share.create_share(access.canvas_id, mode))
        logger.info(f"Created {share.mode} share {share.id} for canvas {canvas_id}")
        return share

    async def revoke_share(self, owner_id: str, canvas_id: str, share_id: str) -> None:
        """Отзыв ссылки (удаление без возможности восстановить)"""
        await resolve_owner_access(self.session, owner_id, canvas_id)
        revoked = await self.share_repository.delete(share_id, canvas_id, owner_id)
        if not revoked:
            raise NotFoundError("Share not found")
        logger.info(f"Revoked share {share_id} of canvas {canvas_id}")

    async def open_shared_canvas(self, token: str) -> Tuple[Canvas, List[TaskNode], str]:
        """Холст, его узлы и режим доступа по токену"""
        access = await resolve_share_access(self.session, token)
        nodes = await self.node_service.list_canvas_nodes(access)
        return access.canvas, nodes, access.mode

    async def replace_shared_nodes(self, token: str, nodes: List[TaskNode]) -> int:
        """Замена узлов по ссылке; ссылка только для просмотра отклоняется"""
        access: ShareAccess = await resolve_share_access(self.session, token)
        return await self.node_service.replace_canvas_nodes(access, nodes)
