from datetime import datetime
from typing import Optional, List

from taskboard.core.schemas import CamelModel
from taskboard.domains.canvases.schemas import CanvasResponse
from taskboard.domains.nodes.schemas import NodeResponse


class ShareCreate(CamelModel):
    """Запрос на создание ссылки; все, кроме "edit", дает режим просмотра"""
    mode: Optional[str] = None


class ShareResponse(CamelModel):
    id: str
    canvas_id: str
    token: str
    mode: str
    created_at: datetime


class SharedCanvasResponse(CamelModel):
    """Холст, открытый по ссылке"""
    canvas: CanvasResponse
    nodes: List[NodeResponse]
    mode: str
