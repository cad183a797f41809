from fastapi import APIRouter, Depends, HTTPException

from app.contracts import api
from app.core.dependencies import get_storage
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Home"])


@router.get(
    api.home.daily.route_path,
    response_model=api.home.daily.response_model,
    description="Session of the day: day-of-year modulo catalog size, catalog ordered by id.",
)
async def daily(storage: DatabaseStorage = Depends(get_storage)):
    session = await storage.get_daily_session()
    if session is None:
        raise HTTPException(status_code=404, detail="No sessions available")
    return session


@router.get(api.home.featured.route_path, response_model=api.home.featured.response_model)
async def featured(storage: DatabaseStorage = Depends(get_storage)):
    return await storage.get_featured_sessions()


@router.get(api.home.popular.route_path, response_model=api.home.popular.response_model)
async def popular(storage: DatabaseStorage = Depends(get_storage)):
    return await storage.get_popular_sessions()
