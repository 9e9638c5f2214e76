from taskboard.domains.canvases.entities import (
    Canvas, CANVAS_NAME_MAX_LENGTH, DEFAULT_CANVAS_NAME, DEFAULT_WORKSPACE_NAME
)
from taskboard.domains.canvases.schemas import CanvasCreate, CanvasRename, CanvasResponse

__all__ = [
    "Canvas", "CANVAS_NAME_MAX_LENGTH", "DEFAULT_CANVAS_NAME", "DEFAULT_WORKSPACE_NAME",
    "CanvasCreate", "CanvasRename", "CanvasResponse",
]
