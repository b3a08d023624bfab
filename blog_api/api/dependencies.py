"""Route Dependencies — wires a per-request persistence gateway onto the request session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.repository_protocols import BlogGateway
from blog_api.infrastructure.database import get_db
from blog_api.infrastructure.persistence_gateway import SqlAlchemyGateway


async def get_gateway(db: AsyncSession = Depends(get_db)) -> BlogGateway:
    """FastAPI dependency: gateway bound to this request's session."""
    return SqlAlchemyGateway(db)
