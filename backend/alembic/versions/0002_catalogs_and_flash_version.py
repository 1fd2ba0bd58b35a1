"""catalogs_and_flash_version

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Adds the interest and course catalogs with their per-user link tables, and
the flash_version counter on user_sessions.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- interests ---
    op.create_table(
        "interests",
        sa.Column("interest_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )
    op.create_table(
        "user_interests",
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "interest_id", sa.Integer, sa.ForeignKey("interests.interest_id", ondelete="CASCADE"), primary_key=True
        ),
    )

    # --- courses ---
    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
    )
    op.create_table(
        "user_courses",
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.course_id", ondelete="CASCADE"), primary_key=True),
    )

    # --- user_sessions.flash_version ---
    with op.batch_alter_table("user_sessions") as batch_op:
        batch_op.add_column(sa.Column("flash_version", sa.Integer, nullable=False, server_default="0"))


def downgrade() -> None:
    with op.batch_alter_table("user_sessions") as batch_op:
        batch_op.drop_column("flash_version")
    op.drop_table("user_courses")
    op.drop_table("courses")
    op.drop_table("user_interests")
    op.drop_table("interests")
