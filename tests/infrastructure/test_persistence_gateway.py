"""Persistence Gateway — relational invariants enforced through SqlAlchemyGateway.

Invariants:
    - Duplicate email → ConstraintViolationError, no second row
    - Unknown author email → NotFoundError, no post row
    - Posts start unpublished; only publish_post on that id flips the flag
    - list_published_posts never returns an unpublished post
    - Deleting a user keeps its posts with author_id NULL
    - Nested user+posts creation is all-or-nothing
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import MANYTOONE

from blog_api.core.errors import ConstraintViolationError, NotFoundError
from blog_api.infrastructure.persistence_gateway import SqlAlchemyGateway
from blog_api.models.post import Post
from blog_api.models.user import User


async def _count(db, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# --- Users ---------------------------------------------------------------------

async def test_create_user_assigns_id(gateway):
    user = await gateway.create_user(email="alice@example.com", name="Alice")
    assert user.id is not None
    assert user.email == "alice@example.com"
    assert user.name == "Alice"


async def test_create_user_name_is_optional(gateway):
    user = await gateway.create_user(email="anon@example.com")
    assert user.name is None


async def test_duplicate_email_raises_constraint_violation(gateway, test_db):
    await gateway.create_user(email="alice@example.com", name="Alice")

    with pytest.raises(ConstraintViolationError):
        await gateway.create_user(email="alice@example.com", name="Impostor")

    users = await gateway.list_users()
    assert [(u.email, u.name) for u in users] == [("alice@example.com", "Alice")]
    assert await _count(test_db, User) == 1


async def test_nested_posts_created_and_linked(gateway):
    user = await gateway.create_user(
        email="bob@example.com",
        nested_posts=[{"title": "First"}, {"title": "Second", "content": "body"}],
    )
    user_id = user.id

    loaded = await gateway.get_user(user_id, include_posts=True)
    assert sorted(p.title for p in loaded.posts) == ["First", "Second"]
    assert all(p.author_id == user_id for p in loaded.posts)
    assert all(p.published is False for p in loaded.posts)


async def test_nested_create_is_all_or_nothing(gateway, test_db):
    await gateway.create_user(email="bob@example.com")

    with pytest.raises(ConstraintViolationError):
        await gateway.create_user(
            email="bob@example.com", nested_posts=[{"title": "Orphan"}],
        )

    assert await _count(test_db, Post) == 0


async def test_list_users_orders_by_id(gateway):
    await gateway.create_user(email="a@example.com")
    await gateway.create_user(email="b@example.com")

    users = await gateway.list_users(include_posts=False)

    assert [u.email for u in users] == ["a@example.com", "b@example.com"]


async def test_list_users_with_posts(gateway):
    await gateway.create_user(
        email="a@example.com", nested_posts=[{"title": "A1"}],
    )
    await gateway.create_user(email="b@example.com")

    users = await gateway.list_users(include_posts=True)

    assert {u.email: [p.title for p in u.posts] for u in users} == {
        "a@example.com": ["A1"],
        "b@example.com": [],
    }


async def test_get_user_absent_returns_none(gateway):
    assert await gateway.get_user(999) is None


async def test_delete_user_nulls_author_on_posts(gateway, test_db):
    user = await gateway.create_user(
        email="alice@example.com", nested_posts=[{"title": "Survivor"}],
    )
    user_id, post_id = user.id, user.posts[0].id

    await gateway.delete_user(user_id)

    post = await gateway.get_post(post_id)
    assert post is not None
    assert post.title == "Survivor"
    assert post.author_id is None
    assert await gateway.get_user(user_id) is None
    assert await _count(test_db, Post) == 1


async def test_delete_absent_user_raises_not_found(gateway):
    with pytest.raises(NotFoundError):
        await gateway.delete_user(42)


async def test_feed_post_of_deleted_author_has_no_author(
    gateway, test_session_factory,
):
    user = await gateway.create_user(
        email="alice@example.com", nested_posts=[{"title": "Orphaned"}],
    )
    post_id = user.posts[0].id
    await gateway.publish_post(post_id)

    await gateway.delete_user(user.id)

    async with test_session_factory() as db:
        [entry] = await SqlAlchemyGateway(db).list_published_posts()
    assert entry.id == post_id
    assert entry.author is None


def test_post_author_is_optional_many_to_one():
    rel = Post.__mapper__.relationships["author"]
    assert rel.direction is MANYTOONE
    assert rel.uselist is False
    assert Post.__table__.c.author_id.nullable is True


# --- Posts ---------------------------------------------------------------------

async def test_create_post_without_author(gateway):
    post = await gateway.create_post(title="Standalone")
    assert post.id is not None
    assert post.published is False
    assert post.author_id is None


async def test_create_post_connects_author_by_email(gateway):
    user = await gateway.create_user(email="alice@example.com")
    post = await gateway.create_post(
        title="Hello", content="World", author_email="alice@example.com",
    )
    assert post.author_id == user.id
    assert post.content == "World"


async def test_create_post_unknown_author_raises_not_found(gateway, test_db):
    with pytest.raises(NotFoundError) as exc_info:
        await gateway.create_post(title="Lost", author_email="ghost@example.com")

    assert exc_info.value.resource_type == "User"
    assert await _count(test_db, Post) == 0


async def test_publish_only_flips_target_post(gateway):
    first = await gateway.create_post(title="First")
    second = await gateway.create_post(title="Second")
    first_id, second_id = first.id, second.id

    published = await gateway.publish_post(first_id)

    assert published.id == first_id
    assert published.published is True
    assert (await gateway.get_post(first_id)).published is True
    assert (await gateway.get_post(second_id)).published is False


async def test_publish_absent_post_raises_not_found(gateway):
    with pytest.raises(NotFoundError):
        await gateway.publish_post(123)


async def test_published_feed_excludes_drafts(gateway):
    await gateway.create_user(email="alice@example.com", name="Alice")
    ids = []
    for i in range(5):
        post = await gateway.create_post(
            title=f"Post {i}", author_email="alice@example.com" if i % 2 else None,
        )
        ids.append(post.id)
    for post_id in ids[1:4]:
        await gateway.publish_post(post_id)

    feed = await gateway.list_published_posts()

    assert [p.id for p in feed] == ids[1:4]
    assert all(p.published for p in feed)
    authors = {p.id: p.author.email if p.author else None for p in feed}
    assert authors == {
        ids[1]: "alice@example.com",
        ids[2]: None,
        ids[3]: "alice@example.com",
    }


async def test_get_absent_post_returns_none(gateway):
    assert await gateway.get_post(7) is None


async def test_delete_post_returns_deleted_record(gateway, test_db):
    post = await gateway.create_post(title="Doomed", content="bye")
    post_id = post.id

    deleted = await gateway.delete_post(post_id)

    assert deleted.id == post_id
    assert deleted.title == "Doomed"
    assert await gateway.get_post(post_id) is None
    assert await _count(test_db, Post) == 0


async def test_delete_absent_post_raises_not_found(gateway):
    with pytest.raises(NotFoundError):
        await gateway.delete_post(404)


async def test_delete_post_keeps_author(gateway, test_db):
    user = await gateway.create_user(
        email="alice@example.com", nested_posts=[{"title": "Only"}],
    )
    user_id, post_id = user.id, user.posts[0].id

    await gateway.delete_post(post_id)

    assert await gateway.get_user(user_id) is not None
    assert await _count(test_db, User) == 1
