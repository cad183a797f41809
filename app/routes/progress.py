from fastapi import APIRouter, Depends

from app.contracts import api
from app.controllers.progress_controller import get_stats, record_progress
from app.core.dependencies import get_current_user, get_storage
from app.models.user import User
from app.schemas.progress import ProgressCreate
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Progress"])


@router.post(
    api.progress.record.route_path,
    response_model=api.progress.record.response_model,
    status_code=api.progress.record.success_status,
    description="Appends a listening record and updates total minutes and the day streak.",
)
async def record(
    payload: ProgressCreate,
    current_user: User = Depends(get_current_user),
    storage: DatabaseStorage = Depends(get_storage),
):
    return await record_progress(current_user.id, payload, storage)


@router.get(api.progress.stats.route_path, response_model=api.progress.stats.response_model)
async def stats(
    current_user: User = Depends(get_current_user),
    storage: DatabaseStorage = Depends(get_storage),
):
    return await get_stats(current_user.id, storage)
