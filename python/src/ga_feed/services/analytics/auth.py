"""
ClientLogin authentication.

Exchanges an email/password pair for the token sent with every feed
request as ``Authorization: GoogleLogin auth=<token>``.
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional, Protocol

from .exceptions import AuthenticationError
from .transport import HttpResponse

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")


class Transport(Protocol):
    """Anything with HttpTransport's request signature."""

    def request(
        self,
        url: str,
        data: Optional[Mapping[str, Any]] = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        ...


def strip_tags(body: str) -> str:
    """Remove HTML tags from a server response for error messages."""
    return _TAG_RE.sub("", body).strip()


def parse_login_response(body: str) -> Dict[str, str]:
    """Parse newline-delimited ``key=value`` pairs."""
    values: Dict[str, str] = {}
    for line in body.splitlines():
        key, sep, value = line.strip().partition("=")
        if sep:
            values[key] = value
    return values


def auth_header(token: str) -> Dict[str, str]:
    """Authorization header for feed requests."""
    return {"Authorization": f"GoogleLogin auth={token}"}


def authenticate(
    transport: Transport,
    url: str,
    email: str,
    password: str,
    source: str,
) -> str:
    """
    Log in with ClientLogin and return the auth token.

    Args:
        transport: HTTP transport used for the POST
        url: ClientLogin endpoint
        email: Google account email
        password: Google account password
        source: Interface name identifying this client

    Returns:
        Auth token

    Raises:
        AuthenticationError: On a non-2xx response or a missing token
    """
    logger.info(f"Authenticating {email} via ClientLogin")

    response = transport.request(
        url,
        data={
            "accountType": "GOOGLE",
            "Email": email,
            "Passwd": password,
            "source": source,
            "service": "analytics",
        },
        method="POST",
    )

    token = parse_login_response(response.body).get("Auth") if response.is_success else None

    if not token:
        body = strip_tags(response.body)
        logger.error(f"ClientLogin failed with status {response.status_code}: {body}")
        raise AuthenticationError(
            f'Failed to authenticate user. Error: "{body}"',
            status_code=response.status_code,
            response_body=body,
        )

    return token
