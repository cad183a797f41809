from typing import Literal

from pydantic import Field, field_validator

from app.schemas.base import INT32_MAX, INT32_MIN, ApiModel, DbId
from app.schemas.teacher import TeacherOut

Category = Literal["meditation", "sleep", "breathwork", "music"]


class SessionCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str
    category: Category
    duration: int = Field(..., gt=0, le=INT32_MAX)
    audio_url: str | None = None
    image_url: str | None = None
    teacher_id: DbId | None = None
    is_premium: bool = False
    is_featured: bool = False


class SessionUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: Category | None = None
    duration: int | None = Field(default=None, gt=0, le=INT32_MAX)
    audio_url: str | None = None
    image_url: str | None = None
    teacher_id: DbId | None = None
    is_premium: bool | None = None
    is_featured: bool | None = None

    @field_validator("title", "description", "category", "duration", "is_premium", "is_featured")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class SessionFilters(ApiModel):
    """Query string of GET /api/sessions. Every filter is optional; present ones are AND-ed."""
    category: str | None = None
    duration: int | None = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    search: str | None = None
    featured: bool = False


class SessionOut(ApiModel):
    id: int
    title: str
    description: str
    category: str
    duration: int
    audio_url: str | None = None
    image_url: str | None = None
    teacher_id: int | None = None
    is_premium: bool = False
    play_count: int = 0
    is_featured: bool = False


class SessionWithTeacherOut(SessionOut):
    teacher: TeacherOut | None = None


# Teacher detail nests plain sessions
class TeacherWithSessionsOut(TeacherOut):
    sessions: list[SessionOut] = Field(default_factory=list)
