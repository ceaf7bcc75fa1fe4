"""Initial schema - app_user, manuscript, chunk, image.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "manuscript",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author_id", sa.String(255), sa.ForeignKey("app_user.id"), nullable=False),
        sa.Column("original_markdown", sa.Text(), nullable=False),
        sa.Column(
            "image_settings",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_manuscript_author_id", "manuscript", ["author_id"])

    op.create_table(
        "chunk",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "manuscript_id",
            sa.UUID(),
            sa.ForeignKey("manuscript.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("chunk_order", sa.Integer(), nullable=False),
        sa.Column("heading_level1", sa.Text(), nullable=True),
        sa.Column("heading_level2", sa.Text(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("chunk_order >= 0", name="ck_chunk_order_non_negative"),
        # Deferred so order shifts may pass through duplicates inside one transaction.
        sa.UniqueConstraint(
            "manuscript_id",
            "chunk_order",
            name="uq_chunk_manuscript_order",
            deferrable=True,
            initially="DEFERRED",
        ),
    )

    op.create_table(
        "image",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "manuscript_id",
            sa.UUID(),
            sa.ForeignKey("manuscript.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "chunk_id",
            sa.UUID(),
            sa.ForeignKey("chunk.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("local_path", sa.String(1024), nullable=False),
        sa.Column(
            "prompt_params",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("character_reference_url", sa.String(2048), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_image_chunk_created", "image", ["chunk_id", "created_at"])
    op.create_index("ix_image_manuscript_id", "image", ["manuscript_id"])
    op.create_index("ix_image_created_at", "image", ["created_at"])


def downgrade() -> None:
    op.drop_table("image")
    op.drop_table("chunk")
    op.drop_table("manuscript")
    op.drop_table("app_user")
