"""
FastAPI dependencies: database sessions and the admin bearer-token guard.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from portfolio.app.core.logging_config import get_logger
from portfolio.app.core.security import decode_access_token
from portfolio.app.db.session import SessionLocal

logger = get_logger("core.auth")
admin_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_db() -> Session:
    """Yield a session per request; always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(admin_bearer),
) -> dict:
    """
    Guard for /api/admin. Tokens come from the external auth provider; any token that
    verifies against SECRET_KEY and names a subject is an admin. Returns the claims.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        claims = decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.info("Admin token rejected error=%s", e)
        raise _unauthorized("Invalid or expired token")
    if not claims.get("sub"):
        raise _unauthorized("Invalid token")
    return claims
