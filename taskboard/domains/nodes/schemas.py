from datetime import date
from typing import Optional, List, Literal

from pydantic import Field, field_validator

from taskboard.core.schemas import CamelModel
from taskboard.domains.nodes.entities import TaskNode

Priority = Literal["none", "low", "medium", "high"]


class NodePayload(CamelModel):
    """Узел в снимке от клиента; лишние поля игнорируются"""
    id: str = Field(..., min_length=1)
    title: Optional[str] = ""
    x: Optional[float] = 0.0
    y: Optional[float] = 0.0
    priority: Optional[Priority] = "none"
    completed: Optional[bool] = False
    parent_id: Optional[str] = None
    due_date: Optional[date] = None

    @field_validator('parent_id', 'due_date', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        if v == "":
            return None
        return v

    def to_entity(self) -> TaskNode:
        """Доменный узел с подставленными значениями по умолчанию"""
        return TaskNode(
            id=self.id,
            title=self.title or "",
            x=self.x or 0.0,
            y=self.y or 0.0,
            priority=self.priority or "none",
            completed=bool(self.completed),
            parent_id=self.parent_id,
            due_date=self.due_date.isoformat() if self.due_date else None
        )


class NodeReplaceRequest(CamelModel):
    """Полный снимок узлов холста"""
    nodes: List[NodePayload]


class NodeResponse(CamelModel):
    id: str
    title: str
    x: float
    y: float
    priority: Priority
    completed: bool
    parent_id: Optional[str] = None
    due_date: Optional[str] = None


class SaveResponse(CamelModel):
    """Сколько узлов сохранено"""
    saved: int
