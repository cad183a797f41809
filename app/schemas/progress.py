from pydantic import Field

from app.schemas.base import INT32_MAX, ApiModel, DbId


class ProgressCreate(ApiModel):
    session_id: DbId
    minutes_listened: int = Field(..., ge=0, le=INT32_MAX)


class ProgressRecorded(ApiModel):
    success: bool


class UserStats(ApiModel):
    total_minutes: int
    current_streak: int
    sessions_completed: int
