import uuid

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from taskboard.core.db import Base
from taskboard.core.timeutils import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    google_id = Column(String(255), unique=True, index=True, nullable=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    photo = Column(String(1024), nullable=True)
    dark_mode = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    canvases = relationship("Canvas", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
