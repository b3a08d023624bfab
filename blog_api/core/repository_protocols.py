"""Boundary Protocols — contract between the route layer and the persistence gateway.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Routes depend on BlogGateway, never on SQLAlchemy directly
    - Every write commits before the coroutine returns

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any object with these methods
    - UserLike/PostLike describe the ORM rows structurally so core stays ORM-free
"""

from typing import Protocol, Sequence

from blog_api.core.domain_types import UserId, PostId


class PostLike(Protocol):
    """Structural contract for Post rows returned by the gateway."""
    id: int
    title: str
    content: str | None
    published: bool
    author_id: int | None


class UserLike(Protocol):
    """Structural contract for User rows returned by the gateway."""
    id: int
    email: str
    name: str | None


class BlogGateway(Protocol):
    """Typed data-access facade — implemented by infrastructure/persistence_gateway.py."""

    async def create_user(
        self, email: str, name: str | None = None,
        nested_posts: Sequence[dict] = (),
    ) -> UserLike: ...

    async def list_users(self, include_posts: bool = False) -> Sequence[UserLike]: ...

    async def get_user(
        self, user_id: UserId, include_posts: bool = False,
    ) -> UserLike | None: ...

    async def delete_user(self, user_id: UserId) -> UserLike: ...

    async def create_post(
        self, title: str, content: str | None = None,
        author_email: str | None = None,
    ) -> PostLike: ...

    async def list_published_posts(self) -> Sequence[PostLike]: ...

    async def get_post(self, post_id: PostId) -> PostLike | None: ...

    async def publish_post(self, post_id: PostId) -> PostLike: ...

    async def delete_post(self, post_id: PostId) -> PostLike: ...
