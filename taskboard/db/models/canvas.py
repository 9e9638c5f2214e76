import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from taskboard.core.db import Base
from taskboard.core.timeutils import utcnow


class Canvas(Base):
    __tablename__ = "canvases"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    owner = relationship("User", back_populates="canvases")
    nodes = relationship("Node", back_populates="canvas", cascade="all, delete-orphan", passive_deletes=True)
    shares = relationship("Share", back_populates="canvas", cascade="all, delete-orphan", passive_deletes=True)
