from sqlalchemy import (
    Column, String, Text, Float, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, Index
)
from sqlalchemy.orm import relationship

from taskboard.core.db import Base
from taskboard.core.timeutils import utcnow

PRIORITIES = ("none", "low", "medium", "high")


class Node(Base):
    __tablename__ = "nodes"

    # id приходит от клиента, уникален только в пределах холста
    canvas_id = Column(String(36), ForeignKey("canvases.id", ondelete="CASCADE"), primary_key=True)
    id = Column(String(255), primary_key=True)
    title = Column(Text, nullable=False, default="")
    x = Column(Float, nullable=False, default=0)
    y = Column(Float, nullable=False, default=0)
    priority = Column(String(10), nullable=False, default="none")
    completed = Column(Boolean, nullable=False, default=False)
    parent_id = Column(String(255), nullable=True)
    due_date = Column(String(32), nullable=True)
    seq = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "priority IN ('none', 'low', 'medium', 'high')",
            name="ck_nodes_priority",
        ),
        Index("ix_nodes_canvas_seq", "canvas_id", "seq"),
        Index("ix_nodes_parent", "canvas_id", "parent_id"),
    )

    # Relationships
    canvas = relationship("Canvas", back_populates="nodes")
