import logging

from fastapi import HTTPException, status

from app.schemas.progress import ProgressCreate, ProgressRecorded, UserStats
from app.services.storage import DatabaseStorage

logger = logging.getLogger(__name__)


async def record_progress(user_id: int, payload: ProgressCreate, storage: DatabaseStorage) -> ProgressRecorded:
    recorded = await storage.record_progress(user_id, payload.session_id, payload.minutes_listened)
    if not recorded:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")

    logger.info("user %s listened %s min of session %s", user_id, payload.minutes_listened, payload.session_id)
    return ProgressRecorded(success=True)


async def get_stats(user_id: int, storage: DatabaseStorage) -> UserStats:
    return UserStats.model_validate(await storage.get_user_stats(user_id))
