"""Redirects and the revalidate-then-redirect commit step"""

from typing import Dict, NoReturn, Optional

from app.core.cache import revalidate_path
from app.core.exceptions import RedirectError


def redirect(path: str, cookies: Optional[Dict[str, str]] = None) -> NoReturn:
    raise RedirectError(path, cookies)


def commit_and_redirect(path: str) -> NoReturn:
    """Invalidate the cached view at `path`, then navigate to it. Success path only."""
    revalidate_path(path)
    redirect(path)
