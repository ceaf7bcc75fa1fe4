"""Add app_user.display_name, never blank when set.

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column("app_user", sa.Column("display_name", sa.String(100), nullable=True))
    op.create_check_constraint(
        "ck_app_user_display_name_not_blank",
        "app_user",
        "display_name IS NULL OR btrim(display_name) <> ''",
    )


def downgrade() -> None:
    op.drop_constraint("ck_app_user_display_name_not_blank", "app_user", type_="check")
    op.drop_column("app_user", "display_name")
