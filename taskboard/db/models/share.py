import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from taskboard.core.db import Base
from taskboard.core.timeutils import utcnow

SHARE_MODES = ("view", "edit")


class Share(Base):
    __tablename__ = "canvas_shares"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    canvas_id = Column(String(36), ForeignKey("canvases.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), unique=True, index=True, nullable=False)
    mode = Column(String(10), nullable=False, default="view")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("mode IN ('view', 'edit')", name="ck_canvas_shares_mode"),
    )

    # Relationships
    canvas = relationship("Canvas", back_populates="shares")
