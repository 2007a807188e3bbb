"""Credential sign-in action"""

from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AuthError, sign_in
from app.core.exceptions import RedirectError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Failure category -> message shown on the login form
AUTH_ERROR_MESSAGES = {
    "CredentialsSignin": "Invalid credentials.",
}
DEFAULT_AUTH_ERROR_MESSAGE = "Something went wrong."


async def authenticate(
    db: AsyncSession, prev_state: Optional[str], form_data: Mapping[str, Any]
) -> Optional[str]:
    """
    Sign in with the credentials provider.

    Returns a user-facing message for a known auth failure, None otherwise.
    On success sign_in redirects; that and any non-auth error propagate.
    """
    logger.info("Processing authentication")

    try:
        await sign_in("credentials", form_data, db)
    except RedirectError:
        logger.info("Authentication successful")
        raise
    except AuthError as error:
        logger.warning(f"Authentication failed: {error.type}", extra={"auth_error": error.type})
        return AUTH_ERROR_MESSAGES.get(error.type, DEFAULT_AUTH_ERROR_MESSAGE)
    except Exception:
        logger.error("Unexpected authentication error", exc_info=True)
        raise

    return None
