"""Exploration command — seeds a demo author with nested posts and prints the data set.

Run against a migrated database: `python -m blog_api.explore` (or `blog-api-explore`).

Invariants:
    - Talks to the store only through SqlAlchemyGateway (same path as the routes)
    - Idempotent on the demo email: a second run reuses the existing user
    - Engine is disposed before the process exits
"""

import asyncio
import logging

from blog_api.config import get_settings
from blog_api.infrastructure.database import DatabaseSessionManager
from blog_api.infrastructure.observability import setup_logging
from blog_api.infrastructure.persistence_gateway import SqlAlchemyGateway
from blog_api.schemas.user import UserWithPosts

logger = logging.getLogger(__name__)

DEMO_EMAIL = "alice@example.com"
DEMO_POSTS = [
    {"title": "Hello World", "content": "First post on the blog."},
    {"title": "Second thoughts", "content": None},
]


async def explore(manager: DatabaseSessionManager) -> list[UserWithPosts]:
    """Ensure the demo author exists, then return every user with their posts."""
    async with manager.session() as db:
        gateway = SqlAlchemyGateway(db)
        users = await gateway.list_users()
        if not any(u.email == DEMO_EMAIL for u in users):
            user = await gateway.create_user(
                email=DEMO_EMAIL, name="Alice", nested_posts=DEMO_POSTS,
            )
            logger.info(f"Created demo user {user.id}", extra={"user_id": user.id})
        users = await gateway.list_users(include_posts=True)
        return [UserWithPosts.model_validate(u) for u in users]


async def _run() -> None:
    settings = get_settings()
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout_seconds,
        connect_timeout=settings.database_connect_timeout_seconds,
        command_timeout=settings.database_command_timeout_seconds,
    )
    try:
        for user in await explore(manager):
            print(user.model_dump_json(by_alias=True, indent=2))
    finally:
        await manager.close()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
