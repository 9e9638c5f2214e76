import uuid
from datetime import datetime
from typing import Optional

from taskboard.core.timeutils import utcnow

CANVAS_NAME_MAX_LENGTH = 100
DEFAULT_CANVAS_NAME = "New canvas"
DEFAULT_WORKSPACE_NAME = "My workspace"


def normalize_canvas_name(name: Optional[str]) -> str:
    """Обрезка имени холста до допустимой длины"""
    return (name or "").strip()[:CANVAS_NAME_MAX_LENGTH]


class Canvas:
    """Сущность холста: именованное рабочее пространство с деревом задач"""

    def __init__(
        self,
        id: str,
        user_id: str,
        name: str,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def rename(self, new_name: str) -> None:
        """Переименование холста"""
        self.name = normalize_canvas_name(new_name)
        self.updated_at = utcnow()

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    @classmethod
    def create_canvas(cls, user_id: str, name: Optional[str] = None) -> "Canvas":
        """Создание нового холста, пустое имя заменяется именем по умолчанию"""
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=normalize_canvas_name(name) or DEFAULT_CANVAS_NAME
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Canvas):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Canvas(id={self.id}, user_id={self.user_id}, name={self.name})"
