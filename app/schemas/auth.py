from datetime import datetime
from pydantic import EmailStr, Field

from app.schemas.base import ApiModel


# ── Request Bodies ────────────────────────────────────────────────────
class RegisterRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "listener@stillwater.io",
                "password": "calm-breath",
                "name": "River",
            }
        }
    }


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


# ── Response Bodies ───────────────────────────────────────────────────
class UserOut(ApiModel):
    """
    Safe user info sent to the frontend.
    The password hash is never included here.
    """
    id: int
    email: str
    name: str
    is_premium: bool = False
    total_minutes: int = 0
    current_streak: int = 0
    last_session_date: datetime | None = None


class AuthResponse(ApiModel):
    user: UserOut
    token: str


class LogoutResponse(ApiModel):
    message: str
