"""
Custom exception hierarchy for the analytics feed client.

Every error raised by the client derives from AnalyticsError so callers
can catch the whole family at once, or pick the specific failure they
care about (login, data request, feed parsing, accessor lookup).
"""

from typing import Optional


class AnalyticsError(Exception):
    """Base exception for all analytics client errors."""
    pass


class AnalyticsAPIError(AnalyticsError):
    """Raised when the remote service answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class AuthenticationError(AnalyticsAPIError):
    """
    Raised when the ClientLogin exchange fails.

    Covers both a non-2xx login response and a 2xx response that does
    not carry an Auth token.
    """

    def __init__(
        self,
        message: str = "Failed to authenticate user",
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class RequestError(AnalyticsAPIError):
    """
    Raised when an account or report feed request is rejected.

    ``response_body`` holds the server text with HTML tags stripped.
    """
    pass


class AnalyticsNetworkError(AnalyticsError):
    """Raised when the HTTP exchange itself fails (connection, timeout)."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class FeedParseError(AnalyticsError):
    """Raised when a feed document cannot be parsed or mapped."""
    pass


class InvalidAccessorError(AnalyticsError):
    """Raised when a named accessor does not match any known field."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f'No valid field called "{name}"')
