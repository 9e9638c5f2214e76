from datetime import datetime
from typing import Optional, List, Dict, Any

from taskboard.core.timeutils import utcnow

PRIORITIES = ("none", "low", "medium", "high")
DEFAULT_PRIORITY = "none"


class TaskNode:
    """Узел-задача на холсте"""

    def __init__(
        self,
        id: str,
        canvas_id: Optional[str] = None,
        title: str = "",
        x: float = 0.0,
        y: float = 0.0,
        priority: str = DEFAULT_PRIORITY,
        completed: bool = False,
        parent_id: Optional[str] = None,
        due_date: Optional[str] = None,
        seq: int = 0,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.canvas_id = canvas_id
        self.title = title
        self.x = x
        self.y = y
        self.priority = priority
        self.completed = completed
        self.parent_id = parent_id
        self.due_date = due_date
        self.seq = seq
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def detach(self) -> None:
        """Превращение узла в корневой"""
        self.parent_id = None

    def to_wire(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "x": self.x,
            "y": self.y,
            "priority": self.priority,
            "completed": self.completed,
            "parentId": self.parent_id,
            "dueDate": self.due_date,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, TaskNode):
            return False
        return self.canvas_id == other.canvas_id and self.id == other.id

    def __repr__(self) -> str:
        return f"TaskNode(id={self.id}, canvas_id={self.canvas_id}, title={self.title!r})"


class NodeSnapshot:
    """Полный снимок узлов холста, который клиент присылает целиком"""

    def __init__(self, canvas_id: str, nodes: List[TaskNode]):
        self.canvas_id = canvas_id
        self.nodes = nodes
        for index, node in enumerate(self.nodes):
            node.canvas_id = canvas_id
            node.seq = index

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def duplicate_ids(self) -> List[str]:
        """Id, встречающиеся в снимке больше одного раза"""
        seen = set()
        duplicates = []
        for node_id in self.node_ids():
            if node_id in seen and node_id not in duplicates:
                duplicates.append(node_id)
            seen.add(node_id)
        return duplicates

    def detach_dangling_parents(self) -> int:
        """Обнуление ссылок на родителей вне снимка, возвращает их число"""
        known = set(self.node_ids())
        detached = 0
        for node in self.nodes:
            if node.parent_id is not None and node.parent_id not in known:
                node.detach()
                detached += 1
        return detached

    def __len__(self) -> int:
        return len(self.nodes)
