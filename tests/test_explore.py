"""Exploration command — seeds the demo author once and reports users with posts."""

from blog_api.explore import DEMO_EMAIL, DEMO_POSTS, explore


async def test_explore_seeds_demo_user(test_manager):
    users = await explore(test_manager)

    assert [u.email for u in users] == [DEMO_EMAIL]
    assert [p.title for p in users[0].posts] == [p["title"] for p in DEMO_POSTS]
    assert all(p.author_id == users[0].id for p in users[0].posts)


async def test_explore_is_idempotent(test_manager):
    await explore(test_manager)
    users = await explore(test_manager)

    assert len(users) == 1
    assert len(users[0].posts) == len(DEMO_POSTS)


async def test_explore_lists_existing_users(test_manager, gateway):
    await gateway.create_user(email="zed@example.com", name="Zed")

    users = await explore(test_manager)

    assert sorted(u.email for u in users) == [DEMO_EMAIL, "zed@example.com"]
    assert {u.email: u.posts for u in users}["zed@example.com"] == []
