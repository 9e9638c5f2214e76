"""Стратегии доступа к холсту.

Владелец и держатель ссылки работают с узлами через одни и те же операции
чтения и замены. Разница только в том, кто считается принципалом и какой
SQL-подзапрос ограничивает набор доступных холстов.
"""
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.errors import NotFoundError
from taskboard.db.repositories.canvas_repository import CanvasRepository, owned_canvas_ids
from taskboard.db.repositories.share_repository import ShareRepository, shared_canvas_ids
from taskboard.domains.canvases.entities import Canvas
from taskboard.domains.shares.entities import SHARE_MODE_EDIT, Share


class CanvasAccess(ABC):
    """Право принципала на конкретный холст"""

    mode: str = SHARE_MODE_EDIT

    def __init__(self, canvas: Canvas):
        self.canvas = canvas

    @property
    def canvas_id(self) -> str:
        return self.canvas.id

    @property
    def can_edit(self) -> bool:
        return self.mode == SHARE_MODE_EDIT

    @abstractmethod
    def read_scope(self):
        """Подзапрос id холстов, доступных для чтения"""

    @abstractmethod
    def write_scope(self):
        """Подзапрос id холстов, доступных для записи"""


class OwnerAccess(CanvasAccess):
    """Доступ владельца холста"""

    def __init__(self, canvas: Canvas, owner_id: str):
        super().__init__(canvas)
        self.owner_id = owner_id

    def read_scope(self):
        return owned_canvas_ids(self.owner_id)

    def write_scope(self):
        return owned_canvas_ids(self.owner_id)

    def __repr__(self) -> str:
        return f"OwnerAccess(canvas_id={self.canvas_id}, owner_id={self.owner_id})"


class ShareAccess(CanvasAccess):
    """Доступ по токену ссылки, без учетной записи"""

    def __init__(self, canvas: Canvas, share: Share):
        super().__init__(canvas)
        self.share = share
        self.mode = share.mode

    def read_scope(self):
        return shared_canvas_ids(self.share.token)

    def write_scope(self):
        return shared_canvas_ids(self.share.token, editable_only=True)

    def __repr__(self) -> str:
        return f"ShareAccess(canvas_id={self.canvas_id}, mode={self.mode})"


async def resolve_owner_access(session: AsyncSession, owner_id: str, canvas_id: str) -> OwnerAccess:
    """Доступ владельца; чужой и несуществующий холст неразличимы"""
    canvas = await CanvasRepository(session).get_owned(canvas_id, owner_id)
    if canvas is None:
        raise NotFoundError("Canvas not found")
    return OwnerAccess(canvas, owner_id)


async def resolve_share_access(session: AsyncSession, token: str) -> ShareAccess:
    """Доступ по токену: ссылка, затем холст"""
    share = await ShareRepository(session).get_by_token(token)
    if share is None:
        raise NotFoundError("Invalid or expired link")

    canvas = await CanvasRepository(session).get_by_id(share.canvas_id)
    if canvas is None:
        raise NotFoundError("Canvas not found")

    return ShareAccess(canvas, share)
