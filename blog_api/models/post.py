"""Post ORM — persists an article, optionally authored and optionally published.

Invariants:
    - published defaults to False; only the publish operation flips it
    - author_id is nullable; FK to users.id with ON DELETE SET NULL
    - author is the optional many-to-one side of User.posts
"""

from typing import Optional

from sqlalchemy import Integer, String, Text, Boolean, ForeignKey, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_api.db.base import Base


class Post(Base):
    """Post entity — belongs to at most one User."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(),
        index=True,
    )
    author_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )

    author: Mapped[Optional["User"]] = relationship(
        "User", back_populates="posts",
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, published={self.published})>"
