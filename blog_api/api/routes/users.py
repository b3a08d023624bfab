"""User Routes — GET /users and POST /user.

Invariants:
    - Each handler calls exactly one gateway operation
    - GET /users never embeds posts
    - Duplicate email surfaces as ConstraintViolationError (409) from the gateway
"""

from fastapi import APIRouter, Depends

from blog_api.api.dependencies import get_gateway
from blog_api.core.repository_protocols import BlogGateway
from blog_api.schemas.user import UserCreate, UserResponse

router = APIRouter(tags=["users"])


@router.get("/users", response_model=list[UserResponse])
async def list_users(gateway: BlogGateway = Depends(get_gateway)):
    """List all users without their posts."""
    return await gateway.list_users(include_posts=False)


@router.post("/user", response_model=UserResponse)
async def create_user(
    body: UserCreate, gateway: BlogGateway = Depends(get_gateway),
):
    """Create a user, plus any nested posts in the same transaction."""
    return await gateway.create_user(
        email=body.email,
        name=body.name,
        nested_posts=[p.model_dump() for p in body.posts],
    )
