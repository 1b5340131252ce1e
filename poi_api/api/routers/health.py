# poi_api/api/routers/health.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from poi_api.api.deps import get_db_session
from poi_api.core.config import settings

router = APIRouter()


@router.get("/", summary="Service banner")
async def root():
    return {"message": "POI API is running"}


@router.get(f"{settings.API_PREFIX}/health", summary="Health check")
async def health_check(db: AsyncSession = Depends(get_db_session)):
    result = await db.execute(text("SELECT 1"))
    return {"db_ok": bool(result.scalar())}
