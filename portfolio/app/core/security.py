"""
Admin token helpers. Tokens are minted by the auth provider with the shared secret;
create_access_token exists for tooling and tests.
"""
from datetime import datetime, timedelta, timezone

from jose import jwt

from portfolio.app.core.config import settings


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign a JWT carrying `data` plus an `exp` claim."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT. Raises jose.JWTError on bad signature or expiry."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
