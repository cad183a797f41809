import logging

from fastapi import HTTPException, status

from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserOut
from app.services.storage import DatabaseStorage, EmailAlreadyRegistered

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid email or password"


def _email_taken() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")


async def register(payload: RegisterRequest, storage: DatabaseStorage) -> AuthResponse:
    """
    The lookup is only an early rejection; the unique index on users.email is what
    actually prevents two accounts racing for the same address.
    """
    if await storage.get_user_by_email(payload.email):
        raise _email_taken()

    try:
        user = await storage.create_user(
            email=payload.email,
            password_hash=hash_password(payload.password),
            name=payload.name,
        )
    except EmailAlreadyRegistered:
        raise _email_taken()

    logger.info("registered user id=%s", user.id)
    return AuthResponse(user=UserOut.model_validate(user), token=create_access_token(user.id))


async def login(payload: LoginRequest, storage: DatabaseStorage) -> AuthResponse:
    """
    Same 401 for an unknown email and a wrong password, and a password check runs
    either way so timing does not reveal which accounts exist.
    """
    user = await storage.get_user_by_email(payload.email)
    password_ok = verify_password(payload.password, user.password if user else None)

    if not user or not password_ok:
        logger.info("failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_LOGIN)

    return AuthResponse(user=UserOut.model_validate(user), token=create_access_token(user.id))


async def get_me(user: User) -> UserOut:
    """User already loaded by the auth dependency."""
    return UserOut.model_validate(user)
