import uuid
from datetime import datetime
from typing import Optional

from taskboard.core.security import generate_share_token
from taskboard.core.timeutils import utcnow

SHARE_MODE_VIEW = "view"
SHARE_MODE_EDIT = "edit"


def normalize_share_mode(mode: Optional[str]) -> str:
    """Все, кроме явного "edit", считается ссылкой только для просмотра"""
    return SHARE_MODE_EDIT if mode == SHARE_MODE_EDIT else SHARE_MODE_VIEW


class Share:
    """Ссылка доступа к холсту без учетной записи"""

    def __init__(
        self,
        id: str,
        canvas_id: str,
        token: str,
        mode: str = SHARE_MODE_VIEW,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.canvas_id = canvas_id
        self.token = token
        self.mode = mode
        self.created_at = created_at or utcnow()

    @property
    def can_edit(self) -> bool:
        return self.mode == SHARE_MODE_EDIT

    @classmethod
    def create_share(cls, canvas_id: str, mode: Optional[str] = None) -> "Share":
        """Создание ссылки со свежим неугадываемым токеном"""
        return cls(
            id=str(uuid.uuid4()),
            canvas_id=canvas_id,
            token=generate_share_token(),
            mode=normalize_share_mode(mode)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Share):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Share(id={self.id}, canvas_id={self.canvas_id}, mode={self.mode})"
