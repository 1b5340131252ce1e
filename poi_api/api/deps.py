# poi_api/api/deps.py

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from poi_api.db.session import AsyncSessionLocal
from poi_api.repositories.poi import PoiRepository
from poi_api.services.poi import PoiService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding an async SQLAlchemy session.
    The session is closed when the request is done.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_poi_repository() -> PoiRepository:
    return PoiRepository(AsyncSessionLocal)


def get_poi_service(
    repository: PoiRepository = Depends(get_poi_repository),
) -> PoiService:
    return PoiService(repository)
