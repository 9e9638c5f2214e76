from taskboard.client.tree import Node, NODE_WIDTH, NODE_HEIGHT
from taskboard.client.history import BoardState, UNDO_LIMIT
from taskboard.client.scheduler import Debouncer
from taskboard.client.api import ApiError, TaskboardClient, SharedCanvasClient
from taskboard.client.sync import CanvasSync, NodeStore

__all__ = [
    "Node",
    "NODE_WIDTH",
    "NODE_HEIGHT",
    "BoardState",
    "UNDO_LIMIT",
    "Debouncer",
    "ApiError",
    "TaskboardClient",
    "SharedCanvasClient",
    "CanvasSync",
    "NodeStore",
]
