"""
HTTP transport for the analytics feed client.

A thin synchronous wrapper around ``httpx.Client`` exposing the single
call the client needs::

    request(url, data, method, headers) -> HttpResponse

GET data is serialized into the query string, POST data is sent as a
form body. Non-2xx responses are returned, not raised: the caller
decides which error they become.
"""

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .exceptions import AnalyticsNetworkError

logger = logging.getLogger(__name__)

QUERY_SAFE_CHARACTERS = ":,-"

# Already URL-encoded by the filter compiler; sent verbatim
PRE_ENCODED_PARAMETERS = frozenset({"filters"})


class HttpResponse(BaseModel):
    """Status and decoded body of one HTTP exchange."""

    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def build_query_string(data: Mapping[str, Any]) -> str:
    """
    Serialize parameters into a query string.

    None values are dropped. Parameters in PRE_ENCODED_PARAMETERS are
    copied as-is; every other value is percent-encoded except for the
    characters in QUERY_SAFE_CHARACTERS.
    """
    pairs = []
    for key, value in data.items():
        if value is None:
            continue
        if key in PRE_ENCODED_PARAMETERS:
            encoded = str(value)
        else:
            encoded = quote(str(value), safe=QUERY_SAFE_CHARACTERS)
        pairs.append(f"{quote(str(key), safe='-')}={encoded}")
    return "&".join(pairs)


class HttpTransport:
    """
    Synchronous HTTP transport backed by httpx.

    Example:
        >>> with HttpTransport(timeout=10.0) as transport:
        ...     response = transport.request(
        ...         "https://www.google.com/analytics/feeds/data",
        ...         data={"ids": "ga:12345"},
        ...         headers={"Authorization": "GoogleLogin auth=..."},
        ...     )
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize transport.

        Args:
            timeout: Request timeout in seconds (ignored when ``client``
                is supplied)
            client: Pre-configured httpx client, e.g. one mounted on an
                ``httpx.MockTransport`` in tests
        """
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def request(
        self,
        url: str,
        data: Optional[Mapping[str, Any]] = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """
        Perform one HTTP request.

        Raises:
            AnalyticsNetworkError: On connection failures and timeouts
            ValueError: For methods other than GET and POST
        """
        method = method.upper()
        data = dict(data or {})

        try:
            if method == "GET":
                query = build_query_string(data)
                full_url = f"{url}?{query}" if query else url
                response = self._client.get(full_url, headers=headers)
            elif method == "POST":
                form = {key: str(value) for key, value in data.items() if value is not None}
                response = self._client.post(url, data=form, headers=headers)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except httpx.TimeoutException as e:
            logger.error(f"{method} {url} timed out after {self.timeout}s")
            raise AnalyticsNetworkError(f"Request to {url} timed out: {e}", url=url) from e
        except httpx.TransportError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise AnalyticsNetworkError(f"Request to {url} failed: {e}", url=url) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return HttpResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
