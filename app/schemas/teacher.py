from pydantic import Field, field_validator

from app.schemas.base import ApiModel


class TeacherCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    bio: str
    avatar_url: str | None = None
    specialty: str = Field(..., min_length=1, max_length=255)


class TeacherUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    bio: str | None = None
    avatar_url: str | None = None
    specialty: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("name", "bio", "specialty")
    @classmethod
    def _not_null(cls, v):
        # Only runs when the key is present; omitted keys stay untouched
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class TeacherOut(ApiModel):
    id: int
    name: str
    bio: str
    avatar_url: str | None = None
    specialty: str
