"""Post Routes — feed, lookup, creation, publishing and deletion of posts.

Invariants:
    - Each handler calls exactly one gateway operation
    - Path ids are ints within the store id range: non-numeric or out-of-range ids
      fail validation (400) before the gateway
    - GET /post/{id} answers 200 with null for an absent post; publish/delete answer 404
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from blog_api.api.dependencies import get_gateway
from blog_api.core.domain_types import MAX_STORE_ID, MIN_STORE_ID, PostId
from blog_api.core.repository_protocols import BlogGateway
from blog_api.schemas.post import PostCreate, PostResponse, PostWithAuthor

router = APIRouter(tags=["posts"])

PostIdParam = Annotated[int, Path(ge=MIN_STORE_ID, le=MAX_STORE_ID)]


@router.get("/feed", response_model=list[PostWithAuthor])
async def get_feed(gateway: BlogGateway = Depends(get_gateway)):
    """Published posts, each with its author."""
    return await gateway.list_published_posts()


@router.get("/post/{post_id}", response_model=PostResponse | None)
async def get_post(
    post_id: PostIdParam, gateway: BlogGateway = Depends(get_gateway),
):
    return await gateway.get_post(PostId(post_id))


@router.post("/post", response_model=PostResponse)
async def create_post(
    body: PostCreate, gateway: BlogGateway = Depends(get_gateway),
):
    """Create an unpublished draft, optionally connected to an author by email."""
    return await gateway.create_post(
        title=body.title,
        content=body.content,
        author_email=body.author_email,
    )


@router.put("/post/publish/{post_id}", response_model=PostResponse)
async def publish_post(
    post_id: PostIdParam, gateway: BlogGateway = Depends(get_gateway),
):
    return await gateway.publish_post(PostId(post_id))


@router.delete("/post/{post_id}", response_model=PostResponse)
async def delete_post(
    post_id: PostIdParam, gateway: BlogGateway = Depends(get_gateway),
):
    return await gateway.delete_post(PostId(post_id))
