import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Path, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import decode_access_token
from app.models.user import User
from app.schemas.base import INT32_MAX, INT32_MIN
from app.services.storage import DatabaseStorage

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)

# ids in the URL share the INTEGER column range
PathId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_storage(db: AsyncSession = Depends(get_db)) -> DatabaseStorage:
    return DatabaseStorage(db)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> int:
    """
    Bearer guard.

    No header / not a Bearer header -> 401 "Unauthorized"
    Bad signature, expired, or no usable sub claim -> 401 "Invalid token"
    """
    if not credentials:
        raise _unauthorized("Unauthorized")

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        logger.info("rejected bearer token")
        raise _unauthorized("Invalid token")

    return user_id


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    storage: DatabaseStorage = Depends(get_storage),
) -> User:
    """Bearer guard that also loads the account; a token for a deleted user is rejected."""
    user = await storage.get_user(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user
