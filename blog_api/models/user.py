"""User ORM — persists an account that may author posts.

Invariants:
    - id is an autoincrement integer primary key, never reassigned
    - email is non-nullable and unique (users_email_key)
    - posts are NOT cascade-deleted: deleting a user nulls Post.author_id

Design Decisions:
    - No delete cascade on posts: the ORM sets author_id to NULL on flush, and the
      FK carries ON DELETE SET NULL for deletes issued outside the ORM
    - Default lazy loading: callers opt into posts with selectinload (async has no lazy IO)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_api.db.base import Base


class User(Base):
    """User entity — optional author of posts."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    name: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )

    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="author",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
