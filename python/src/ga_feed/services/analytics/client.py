"""
Analytics feed API client.

Authenticates once, then issues one GET per account or report request
and maps the XML response into entry models. The client keeps only the
most recent result set, root parameters and aggregate metrics; a failed
request leaves them untouched.
"""

import logging
from typing import Dict, List, Optional, Union

from ...core.config import Settings, settings as default_settings
from .auth import Transport, auth_header, authenticate, strip_tags
from .entries import (
    AccountEntry,
    FeedValue,
    MetricValue,
    ReportEntry,
    normalize_accessor,
    resolve,
)
from .exceptions import InvalidAccessorError, RequestError
from .feed_mapper import FeedMapper
from .query_builder import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_START_INDEX,
    DateLike,
    NameList,
    QueryParameterBuilder,
)
from .transport import HttpResponse, HttpTransport

logger = logging.getLogger(__name__)

Entry = Union[AccountEntry, ReportEntry]


class AnalyticsClient:
    """
    Client for the analytics account and report feeds.

    Example:
        >>> client = AnalyticsClient(email="me@example.com", password="...")
        >>> entries = client.request_report_data(
        ...     report_id="12345",
        ...     dimensions=["browser"],
        ...     metrics=["pageviews"],
        ...     sort="-pageviews",
        ...     filters="pageviews>100 && browser==Firefox",
        ... )
        >>> for entry in entries:
        ...     print(entry, entry.get("pageviews"))
        >>> client.get("totalResults")
    """

    def __init__(
        self,
        email: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
        *,
        dev_mode: Optional[bool] = None,
        transport: Optional[Transport] = None,
        config: Optional[Settings] = None,
    ):
        """
        Initialize client, logging in unless a token is supplied.

        Args:
            email: Google account email (ignored when ``token`` is given)
            password: Google account password
            token: Pre-obtained auth token; skips authentication
            dev_mode: Request pretty-printed feeds (default from settings)
            transport: HTTP transport; an HttpTransport is created and
                owned by the client when omitted
            config: Settings to use instead of the global instance

        Raises:
            ValueError: If neither a token nor email and password are given
            AuthenticationError: If the login is rejected
        """
        self.config = config or default_settings
        self.dev_mode = self.config.GA_DEV_MODE if dev_mode is None else dev_mode

        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout=self.config.GA_REQUEST_TIMEOUT)

        self.query_builder = QueryParameterBuilder(dev_mode=self.dev_mode)
        self.feed_mapper = FeedMapper()

        self._results: Optional[List[Entry]] = None
        self._root_parameters: Dict[str, FeedValue] = {}
        self._aggregate_metrics: Dict[str, MetricValue] = {}

        if token:
            self._auth_token = token
        elif email and password:
            try:
                self._auth_token = authenticate(
                    self.transport,
                    self.config.GA_CLIENT_LOGIN_URL,
                    email,
                    password,
                    source=self.config.GA_INTERFACE_NAME,
                )
            except Exception:
                self.close()
                raise
        else:
            self.close()
            raise ValueError("Either a token or an email and password are required")

        logger.info(f"Analytics client initialized (dev_mode={self.dev_mode})")

    @property
    def auth_token(self) -> str:
        return self._auth_token

    @property
    def results(self) -> Optional[List[Entry]]:
        """Entries from the last successful request, or None before any."""
        return self._results

    @property
    def root_parameters(self) -> Dict[str, FeedValue]:
        return self._root_parameters

    @property
    def aggregate_metrics(self) -> Dict[str, MetricValue]:
        return self._aggregate_metrics

    def request_account_data(
        self,
        start_index: int = DEFAULT_START_INDEX,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> List[AccountEntry]:
        """
        Request the profiles visible to the authenticated account.

        Raises:
            RequestError: If the feed request is rejected
            FeedParseError: If the response is not a valid feed
            AnalyticsNetworkError: If the request cannot be sent
        """
        parameters = self.query_builder.build_account_parameters(start_index, max_results)
        response = self._get(self.config.GA_ACCOUNT_FEED_URL, parameters, "account")

        feed = self.feed_mapper.map_account_feed(response.body)

        self._root_parameters = feed.root_parameters
        self._aggregate_metrics = {}
        self._results = list(feed.entries)

        logger.info(f"Account feed returned {len(feed.entries)} entries")
        return feed.entries

    def request_report_data(
        self,
        report_id: str,
        dimensions: NameList,
        metrics: NameList,
        sort: Optional[NameList] = None,
        filters: Optional[str] = None,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
        start_index: int = DEFAULT_START_INDEX,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> List[ReportEntry]:
        """
        Request report rows for a profile.

        Args:
            report_id: Profile id, without ``ga:``
            dimensions: e.g. ``["browser"]``
            metrics: e.g. ``["pageviews"]``
            sort: e.g. ``["-visits"]``; defaults to the metrics
            filters: e.g. ``"pageviews>100 && browser==Firefox"``
            start_date: Defaults to one month ago
            end_date: End of the reporting period
            start_index: First result, 1-based
            max_results: Page size

        Returns:
            Report entries; aggregates are available via
            ``aggregate_metrics`` afterwards

        Raises:
            RequestError: If the feed request is rejected
            FeedParseError: If the response is not a valid feed
            AnalyticsNetworkError: If the request cannot be sent
        """
        parameters = self.query_builder.build_report_parameters(
            report_id=report_id,
            dimensions=dimensions,
            metrics=metrics,
            sort=sort,
            filters=filters,
            start_date=start_date,
            end_date=end_date,
            start_index=start_index,
            max_results=max_results,
        )
        response = self._get(self.config.GA_REPORT_FEED_URL, parameters, "report")

        feed = self.feed_mapper.map_report_feed(response.body)

        self._root_parameters = feed.root_parameters
        self._aggregate_metrics = feed.aggregate_metrics
        self._results = list(feed.entries)

        logger.info(
            f"Report feed for ga:{report_id} returned {len(feed.entries)} entries"
        )
        return feed.entries

    def get(self, name: str) -> FeedValue:
        """
        Return a root parameter or aggregate metric from the last response.

        Root parameters are checked before aggregate metrics.

        Raises:
            InvalidAccessorError: If neither holds the name
        """
        try:
            return resolve(name, [self._root_parameters, self._aggregate_metrics])
        except KeyError:
            raise InvalidAccessorError(
                name,
                f'No valid root parameter or aggregate metric called "{normalize_accessor(name)}"',
            ) from None

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "AnalyticsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, url: str, parameters: Dict[str, str], kind: str) -> HttpResponse:
        response = self.transport.request(
            url, data=parameters, method="GET", headers=auth_header(self._auth_token)
        )

        if not response.is_success:
            body = strip_tags(response.body)
            logger.error(f"{kind.capitalize()} request failed with status {response.status_code}: {body}")
            raise RequestError(
                f'Failed to request {kind} data. Error: "{body}"',
                status_code=response.status_code,
                response_body=body,
            )

        return response


def create_analytics_client(
    config: Optional[Settings] = None,
    transport: Optional[Transport] = None,
) -> AnalyticsClient:
    """
    Factory function to create a client from settings.

    Uses GA_AUTH_TOKEN when set, otherwise GA_EMAIL / GA_PASSWORD.

    Example:
        >>> client = create_analytics_client()  # reads GA_* from .env
    """
    config = config or default_settings
    return AnalyticsClient(
        email=config.GA_EMAIL or None,
        password=config.GA_PASSWORD or None,
        token=config.GA_AUTH_TOKEN or None,
        dev_mode=config.GA_DEV_MODE,
        transport=transport,
        config=config,
    )
