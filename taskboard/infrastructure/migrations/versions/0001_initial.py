"""initial schema: users, canvases, nodes, canvas_shares

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("google_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("photo", sa.String(1024), nullable=True),
        sa.Column("dark_mode", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_google_id", "users", ["google_id"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "canvases",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_canvases_user_id", "canvases", ["user_id"])

    op.create_table(
        "nodes",
        sa.Column("canvas_id", sa.String(36), sa.ForeignKey("canvases.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("x", sa.Float(), nullable=False),
        sa.Column("y", sa.Float(), nullable=False),
        sa.Column("priority", sa.String(10), nullable=False, server_default="none"),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("parent_id", sa.String(255), nullable=True),
        sa.Column("due_date", sa.String(32), nullable=True),
        sa.Column("seq", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("priority IN ('none', 'low', 'medium', 'high')", name="ck_nodes_priority"),
    )
    op.create_index("ix_nodes_canvas_seq", "nodes", ["canvas_id", "seq"])
    op.create_index("ix_nodes_parent", "nodes", ["canvas_id", "parent_id"])

    op.create_table(
        "canvas_shares",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("canvas_id", sa.String(36), sa.ForeignKey("canvases.id", ondelete="CASCADE"), nullable=False),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("mode", sa.String(10), nullable=False, server_default="view"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("mode IN ('view', 'edit')", name="ck_canvas_shares_mode"),
    )
    op.create_index("ix_canvas_shares_token", "canvas_shares", ["token"], unique=True)
    op.create_index("ix_canvas_shares_canvas_id", "canvas_shares", ["canvas_id"])


def downgrade():
    op.drop_table("canvas_shares")
    op.drop_table("nodes")
    op.drop_table("canvases")
    op.drop_table("users")
