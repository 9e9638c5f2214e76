from taskboard.db.models.user import User
from taskboard.db.models.canvas import Canvas
from taskboard.db.models.node import Node, PRIORITIES
from taskboard.db.models.share import Share, SHARE_MODES

__all__ = [
    "User",
    "Canvas",
    "Node",
    "PRIORITIES",
    "Share",
    "SHARE_MODES",
]
