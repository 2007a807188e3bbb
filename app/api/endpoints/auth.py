from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.auth import authenticate
from app.api import deps
from app.config import settings
from app.core.auth import sign_out
from app.core.rate_limit import limiter
from app.schemas.auth import AuthenticateResult

router = APIRouter()


@router.post("/login", response_model=AuthenticateResult)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Credentials sign-in form.
    Sets the session cookie and redirects on success, otherwise returns the error message.
    """
    form = await request.form()
    message = await authenticate(db, None, form)
    return AuthenticateResult(message=message)


@router.post("/logout")
async def logout() -> Any:
    sign_out()
