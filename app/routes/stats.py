from fastapi import APIRouter, Depends

from app.contracts import api
from app.core.dependencies import get_storage
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Stats"])


@router.get(api.stats.usage.route_path, response_model=api.stats.usage.response_model)
async def usage(storage: DatabaseStorage = Depends(get_storage)):
    return await storage.get_usage_stats()
