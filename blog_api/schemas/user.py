"""User Schemas — request validation and response shapes for /user and /users.

Invariants:
    - UserCreate.email: 3-255 chars, stripped, must contain "@"
    - Uniqueness of email is NOT checked here; the store constraint is authoritative
"""

from pydantic import Field, field_validator

from blog_api.schemas.common import CamelModel
from blog_api.schemas.post import NestedPostCreate, PostResponse


class UserCreate(CamelModel):
    """User creation — optional nested posts are created in the same transaction."""
    email: str = Field(min_length=3, max_length=255)
    name: str | None = Field(None, max_length=255)
    posts: list[NestedPostCreate] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class UserResponse(CamelModel):
    id: int
    email: str
    name: str | None = None


class UserWithPosts(UserResponse):
    posts: list[PostResponse] = Field(default_factory=list)
