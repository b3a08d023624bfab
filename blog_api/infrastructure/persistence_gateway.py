"""Persistence Gateway — SQLAlchemy implementation of core.repository_protocols.BlogGateway.

Invariants:
    - One gateway per request, bound to that request's AsyncSession
    - Every write commits before returning; nothing is cached or batched across calls
    - No retries: a failed store call raises immediately (translate_store_errors)
    - Nested user+posts creation is a single commit (all-or-nothing)
    - Post.published is set True only by publish_post

Design Decisions:
    - Relationships loaded with selectinload on demand: async sessions cannot lazy-load
    - Author connect-by-email resolves the user first and raises NotFoundError when
      absent; the FK still guards against a concurrent delete (ConstraintViolationError)
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog_api.core.domain_types import UserId, PostId
from blog_api.core.errors import NotFoundError
from blog_api.infrastructure.database import translate_store_errors
from blog_api.models.post import Post
from blog_api.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyGateway:
    """Typed CRUD facade over users and posts."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Users ───────────────────────────────────────────────────

    @translate_store_errors("create_user")
    async def create_user(
        self, email: str, name: str | None = None,
        nested_posts: Sequence[dict] = (),
    ) -> User:
        """Create a user and, in the same transaction, any nested posts."""
        user = User(email=email, name=name)
        user.posts = [
            Post(
                title=p["title"], content=p.get("content"), published=False,
            )
            for p in nested_posts
        ]
        self._db.add(user)
        await self._db.commit()
        # refresh() here would expire user.posts
        logger.info(
            f"Created user {user.id} with {len(nested_posts)} post(s)",
            extra={"user_id": user.id},
        )
        return user

    @translate_store_errors("list_users")
    async def list_users(self, include_posts: bool = False) -> Sequence[User]:
        query = select(User).order_by(User.id)
        if include_posts:
            query = query.options(selectinload(User.posts))
        result = await self._db.execute(query)
        return result.scalars().all()

    @translate_store_errors("get_user")
    async def get_user(
        self, user_id: UserId, include_posts: bool = False,
    ) -> User | None:
        query = select(User).where(User.id == user_id)
        if include_posts:
            query = query.options(selectinload(User.posts))
        result = await self._db.execute(query)
        return result.scalar_one_or_none()

    @translate_store_errors("delete_user")
    async def delete_user(self, user_id: UserId) -> User:
        """Delete a user; its posts survive with author_id set to NULL."""
        # posts must be loaded so the flush can null their author_id
        user = await self.get_user(user_id, include_posts=True)
        if user is None:
            raise NotFoundError("User", user_id)
        orphaned = len(user.posts)
        await self._db.delete(user)
        await self._db.commit()
        logger.info(
            f"Deleted user {user_id}, detached {orphaned} post(s)",
            extra={"user_id": user_id},
        )
        return user

    # ─── Posts ───────────────────────────────────────────────────

    @translate_store_errors("create_post")
    async def create_post(
        self, title: str, content: str | None = None,
        author_email: str | None = None,
    ) -> Post:
        """Create an unpublished post, connecting the author by unique email."""
        post = Post(title=title, content=content, published=False)
        if author_email is not None:
            result = await self._db.execute(
                select(User.id).where(User.email == author_email),
            )
            author_id = result.scalar_one_or_none()
            if author_id is None:
                raise NotFoundError("User", author_email)
            post.author_id = author_id
        self._db.add(post)
        await self._db.commit()
        await self._db.refresh(post)
        logger.info(f"Created post {post.id}", extra={"post_id": post.id})
        return post

    @translate_store_errors("list_published_posts")
    async def list_published_posts(self) -> Sequence[Post]:
        result = await self._db.execute(
            select(Post)
            .where(Post.published.is_(True))
            .options(selectinload(Post.author))
            .order_by(Post.id),
        )
        return result.scalars().all()

    @translate_store_errors("get_post")
    async def get_post(self, post_id: PostId) -> Post | None:
        result = await self._db.execute(
            select(Post).where(Post.id == post_id),
        )
        return result.scalar_one_or_none()

    async def _get_post_or_raise(self, post_id: PostId) -> Post:
        post = await self.get_post(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    @translate_store_errors("publish_post")
    async def publish_post(self, post_id: PostId) -> Post:
        post = await self._get_post_or_raise(post_id)
        post.published = True
        await self._db.commit()
        await self._db.refresh(post)
        logger.info(f"Published post {post_id}", extra={"post_id": post_id})
        return post

    @translate_store_errors("delete_post")
    async def delete_post(self, post_id: PostId) -> Post:
        post = await self._get_post_or_raise(post_id)
        await self._db.delete(post)
        await self._db.commit()
        logger.info(f"Deleted post {post_id}", extra={"post_id": post_id})
        return post
