"""
Error taxonomy for the geocache proxy.

Each error carries the HTTP status it is reported with and a message that is
safe to show to callers. Upstream response bodies are never part of the
public message.
"""
from typing import Optional


class GeocacheError(Exception):
    """Base class for every error the proxy reports to its callers."""

    status_code: int = 500
    public_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.public_message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.public_message)


class InvalidInput(GeocacheError):
    """The caller sent a missing, empty or oversized query."""

    status_code = 400
    public_message = "Query parameter is required"


class ConfigurationError(GeocacheError):
    """The provider credential is not configured on the server."""

    status_code = 500
    public_message = "Server configuration error"


class AuthFailure(GeocacheError):
    """The provider rejected our credential. Reported as an opaque 500."""

    status_code = 500
    public_message = "Authentication failed"


class RateLimited(GeocacheError):
    """The provider is throttling us; the caller may retry later."""

    status_code = 429
    public_message = "Rate limit exceeded. Please try again later."


class ProviderError(GeocacheError):
    """Any other non-success provider status, passed through as-is."""

    public_message = "Failed to fetch location data"

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message, status_code=status_code)


class EmptyResult(GeocacheError):
    """The provider answered but no usable candidate could be extracted."""

    status_code = 502
    public_message = "No location data found"


class UnexpectedError(GeocacheError):
    status_code = 500
    public_message = "An unexpected error occurred"
