"""Control-flow and fatal errors raised by form actions"""

from typing import Dict, Optional


class RedirectError(Exception):
    """
    Raised to end the current action and send the client elsewhere.

    The HTTP layer turns it into a 303 response; `cookies` are set on that
    response (an empty value clears the cookie).
    """

    def __init__(self, location: str, cookies: Optional[Dict[str, str]] = None):
        super().__init__(f"Redirect to {location}")
        self.location = location
        self.cookies = cookies or {}


class InvoiceActionError(Exception):
    """Unrecovered failure of an invoice action; the caller must handle it."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
