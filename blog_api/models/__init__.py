"""ORM Models — SQLAlchemy declarative models for users and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns posts through Post.author_id (nullable, no cascade)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from blog_api.models.user import User  # noqa: F401
from blog_api.models.post import Post  # noqa: F401
