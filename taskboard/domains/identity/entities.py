import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from taskboard.core.timeutils import utcnow


@dataclass(frozen=True)
class ExternalIdentity:
    """Проверенные данные внешнего провайдера (claims Google ID токена)"""
    subject: str
    email: str
    name: str
    photo: Optional[str] = None


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: str,
        email: str,
        name: str,
        google_id: Optional[str] = None,
        photo: Optional[str] = None,
        dark_mode: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.email = email
        self.name = name
        self.google_id = google_id
        self.photo = photo
        self.dark_mode = dark_mode
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def update_profile(self, name: str, photo: Optional[str] = None) -> None:
        """Обновление имени и аватара, провайдер мог их поменять"""
        self.name = name
        self.photo = photo
        self.updated_at = utcnow()

    def link_google_account(self, google_id: str) -> None:
        """Привязка внешней учетной записи к существующему пользователю"""
        self.google_id = google_id
        self.updated_at = utcnow()

    def set_dark_mode(self, enabled: bool) -> None:
        self.dark_mode = bool(enabled)

    def to_profile(self) -> Dict[str, Any]:
        """Профиль в том виде, в каком его отдает API"""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "photo": self.photo,
            "darkMode": self.dark_mode,
        }

    @classmethod
    def create_user(cls, identity: ExternalIdentity) -> "User":
        """Создание нового пользователя по внешней учетной записи"""
        return cls(
            id=str(uuid.uuid4()),
            email=identity.email,
            name=identity.name,
            google_id=identity.subject,
            photo=identity.photo
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, name={self.name})"
