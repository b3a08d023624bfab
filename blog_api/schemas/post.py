"""Post Schemas — request validation and response shapes for /post and /feed.

Invariants:
    - Post titles (standalone or nested): 1-255 chars, stripped, non-empty
    - PostCreate.author_email is stripped; a blank value means no author
    - PostResponse never carries the author object; PostWithAuthor always does (or null)
"""

from pydantic import Field, field_validator

from blog_api.schemas.common import CamelModel


class NestedPostCreate(CamelModel):
    """Post created inside a user creation call."""
    title: str = Field(min_length=1, max_length=255)
    content: str | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class PostCreate(NestedPostCreate):
    """Standalone post creation — author connected by unique email."""
    author_email: str | None = Field(None, max_length=255)

    @field_validator("author_email")
    @classmethod
    def strip_author_email(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class PostResponse(CamelModel):
    id: int
    title: str
    content: str | None = None
    published: bool
    author_id: int | None = None


class PostAuthor(CamelModel):
    """Author as embedded in feed entries."""
    id: int
    email: str
    name: str | None = None


class PostWithAuthor(PostResponse):
    author: PostAuthor | None = None
