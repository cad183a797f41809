from fastapi import HTTPException, status

from app.schemas.favorite import FavoriteStatus
from app.services.storage import DatabaseStorage


async def toggle_favorite(user_id: int, session_id: int, storage: DatabaseStorage) -> FavoriteStatus:
    is_favorite = await storage.toggle_favorite(user_id, session_id)
    if is_favorite is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return FavoriteStatus(is_favorite=is_favorite)


async def check_favorite(user_id: int, session_id: int, storage: DatabaseStorage) -> FavoriteStatus:
    return FavoriteStatus(is_favorite=await storage.is_favorite(user_id, session_id))
