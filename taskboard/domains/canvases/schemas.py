from datetime import datetime
from typing import Optional

from taskboard.core.schemas import CamelModel


class CanvasCreate(CamelModel):
    """Схема для создания холста, имя необязательно"""
    name: Optional[str] = None


class CanvasRename(CamelModel):
    """Схема для переименования холста"""
    name: Optional[str] = None


class CanvasResponse(CamelModel):
    """Схема для ответа с данными холста"""
    id: str
    user_id: str
    name: str
    created_at: datetime
    updated_at: datetime
