"""Initial schema — users and posts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

posts.author_id is nullable and uses ON DELETE SET NULL: deleting a user
keeps its posts. users.email carries the unique constraint that createUser
relies on to reject duplicates.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.UniqueConstraint("email", name="users_email_key"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("author_id", sa.Integer, nullable=True),
        sa.ForeignKeyConstraint(
            ["author_id"], ["users.id"],
            name="posts_author_id_fkey", ondelete="SET NULL",
        ),
    )
    op.create_index("ix_posts_published", "posts", ["published"])


def downgrade() -> None:
    op.drop_index("ix_posts_published", table_name="posts")
    op.drop_table("posts")
    op.drop_table("users")
