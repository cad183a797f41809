from fastapi import APIRouter, Depends

from app.contracts import api
from app.controllers.favorite_controller import check_favorite, toggle_favorite
from app.core.dependencies import PathId, get_current_user, get_storage
from app.models.user import User
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Favorites"])


@router.get(api.favorites.list.route_path, response_model=api.favorites.list.response_model)
async def list_favorites(
    current_user: User = Depends(get_current_user),
    storage: DatabaseStorage = Depends(get_storage),
):
    return await storage.get_favorites(current_user.id)


@router.post(api.favorites.toggle.route_path, response_model=api.favorites.toggle.response_model)
async def toggle(
    session_id: PathId,
    current_user: User = Depends(get_current_user),
    storage: DatabaseStorage = Depends(get_storage),
):
    return await toggle_favorite(current_user.id, session_id, storage)


@router.get(api.favorites.check.route_path, response_model=api.favorites.check.response_model)
async def check(
    session_id: PathId,
    current_user: User = Depends(get_current_user),
    storage: DatabaseStorage = Depends(get_storage),
):
    return await check_favorite(current_user.id, session_id, storage)
