"""
Analytics feed service modules.

This package contains the client for the legacy analytics feed API:
- filters: filter expression compiler
- query_builder: wire parameters for account/report requests
- feed_mapper: XML feed documents to entry models
- entries: AccountEntry / ReportEntry
- transport: httpx-backed HTTP transport
- auth: ClientLogin authentication
- client: AnalyticsClient tying it together
"""

from .client import AnalyticsClient, create_analytics_client
from .entries import AccountEntry, ReportEntry
from .exceptions import (
    AnalyticsAPIError,
    AnalyticsError,
    AnalyticsNetworkError,
    AuthenticationError,
    FeedParseError,
    InvalidAccessorError,
    RequestError,
)
from .feed_mapper import AccountFeed, FeedMapper, ReportFeed
from .filters import FilterExpressionCompiler, compile_filter
from .query_builder import QueryParameterBuilder
from .transport import HttpResponse, HttpTransport

__all__ = [
    "AnalyticsClient",
    "create_analytics_client",
    "AccountEntry",
    "ReportEntry",
    "AnalyticsError",
    "AnalyticsAPIError",
    "AnalyticsNetworkError",
    "AuthenticationError",
    "FeedParseError",
    "InvalidAccessorError",
    "RequestError",
    "AccountFeed",
    "FeedMapper",
    "ReportFeed",
    "FilterExpressionCompiler",
    "compile_filter",
    "QueryParameterBuilder",
    "HttpResponse",
    "HttpTransport",
]
