"""API Dependencies"""

from fastapi import HTTPException, Request, status

from app.config import settings
from app.core.security import decode_token
from app.database import get_db
from app.schemas.auth import SessionUser

__all__ = ["get_db", "get_current_user"]


async def get_current_user(request: Request) -> SessionUser:
    """
    Resolve the signed-in user from the session cookie.

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    payload = decode_token(token) if token else None
    if not payload or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
        )
    return SessionUser(
        user_id=payload["sub"],
        email=payload.get("email", ""),
        name=payload.get("name"),
    )
