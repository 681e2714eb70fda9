"""Exception hierarchy for the Gopher client.

Parsing never raises: malformed listing lines are recovered locally. Only
typed URLs, network operations and external link delegation can fail.
"""

from enum import Enum


class GopherError(Exception):
    """Base class for all Gopher client errors."""


class InvalidUrl(GopherError):
    """Raised when a typed Gopher URL cannot be parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL {url!r}: {reason}")


class FetchErrorKind(Enum):
    """Why a fetch ended without content."""

    NETWORK_FAILURE = "network failure"
    CANCELLED = "cancelled"
    SECURITY_DENIED = "security denied"


class FetchError(GopherError):
    """Raised when a fetch fails or is cancelled."""

    def __init__(self, kind: FetchErrorKind, message: str = ""):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}" if message else kind.value)


class NoHandlerFound(GopherError):
    """Raised when no external handler can open a non-Gopher link."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No handler for {url}")
