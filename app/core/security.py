from datetime import datetime, timedelta, timezone
from jose import jwt
from passlib.context import CryptContext
from app.core.config import settings

# ── Password hashing (bcrypt via passlib) ─────────────────────────────
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Verified against when the account is unknown so a miss costs the same as a hit
_DUMMY_HASH = pwd_context.hash("stillwater-timing-guard")

# bcrypt hashes are always 60 chars ($2b$12$ + 53)
_BCRYPT_HASH_LEN = 60


def hash_password(plain: str) -> str:
    """Salted bcrypt hash; hashing the same password twice gives two different strings."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str | None) -> bool:
    """
    Compare a login password against the stored hash.

    Returns False for a missing account (hashed=None) or a malformed stored hash,
    after running a bcrypt check against the dummy hash.
    """
    if not hashed or len(hashed) < _BCRYPT_HASH_LEN:
        pwd_context.verify(plain, _DUMMY_HASH)
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        pwd_context.verify(plain, _DUMMY_HASH)
        return False


# ── Access tokens ─────────────────────────────────────────────────────
def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """
    Signed HS256 token for `user_id`.

    Claims: sub (user id as a string), iat, exp. Lifetime defaults to
    ACCESS_TOKEN_EXPIRE_MINUTES (one week).
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Claims of a valid token; jose.JWTError for a bad signature or an expired token."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
