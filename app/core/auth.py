"""
Sign-in capability.

`sign_in(provider, form_data, db)` resolves by redirecting with a session
cookie, or raises an `AuthError` whose `type` names the failure category.
"""

from typing import Any, Dict, Mapping, NoReturn, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.logging import get_logger
from app.core.navigation import redirect
from app.core.security import create_session_token
from app.models.user import User
from app.schemas.auth import SignInCredentials
from app.schemas.invoice import safe_parse
from app.services.user_service import UserService

logger = get_logger(__name__)


class AuthError(Exception):
    type = "AuthError"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.type)


class CredentialsSignin(AuthError):
    """The submitted credentials did not match a user."""
    type = "CredentialsSignin"


class CallbackRouteError(AuthError):
    """The provider itself failed while checking credentials."""
    type = "CallbackRouteError"


class InvalidProvider(AuthError):
    type = "InvalidProvider"


class CredentialsProvider:
    """Email and password checked against the users table."""

    name = "credentials"

    async def authorize(self, db: AsyncSession, form_data: Mapping[str, Any]) -> Optional[User]:
        credentials, errors = safe_parse(
            SignInCredentials,
            {"email": form_data.get("email"), "password": form_data.get("password")},
        )
        if errors:
            return None
        return await UserService.authenticate_user(
            db, email=credentials.email, password=credentials.password
        )


PROVIDERS: Dict[str, CredentialsProvider] = {
    CredentialsProvider.name: CredentialsProvider(),
}


def _safe_redirect_target(value: Any) -> str:
    # Only same-site paths; anything else lands on the dashboard
    if isinstance(value, str) and value.startswith("/") and not value.startswith("//"):
        return value
    return settings.DASHBOARD_PATH


async def sign_in(provider: str, form_data: Mapping[str, Any], db: AsyncSession) -> NoReturn:
    handler = PROVIDERS.get(provider)
    if handler is None:
        raise InvalidProvider(f"Unknown sign-in provider: {provider}")

    try:
        user = await handler.authorize(db, form_data)
    except Exception as exc:
        logger.error(f"Sign-in provider '{provider}' failed", exc_info=True)
        raise CallbackRouteError(str(exc)) from exc

    if user is None:
        raise CredentialsSignin()

    token = create_session_token({"sub": str(user.id), "email": user.email, "name": user.name})
    redirect(
        _safe_redirect_target(form_data.get("redirectTo")),
        cookies={settings.SESSION_COOKIE_NAME: token},
    )


def sign_out() -> NoReturn:
    redirect(settings.LOGIN_PATH, cookies={settings.SESSION_COOKIE_NAME: ""})
