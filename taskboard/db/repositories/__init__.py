from taskboard.db.repositories.user_repository import UserRepository
from taskboard.db.repositories.canvas_repository import CanvasRepository, owned_canvas_ids
from taskboard.db.repositories.node_repository import NodeRepository
from taskboard.db.repositories.share_repository import ShareRepository, shared_canvas_ids

__all__ = [
    "UserRepository",
    "CanvasRepository",
    "NodeRepository",
    "ShareRepository",
    "owned_canvas_ids",
    "shared_canvas_ids",
]
