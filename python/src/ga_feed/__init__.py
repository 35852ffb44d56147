"""Client library for the legacy analytics feed (Data Export) API."""

from .services.analytics import (
    AccountEntry,
    AnalyticsClient,
    AnalyticsError,
    ReportEntry,
    create_analytics_client,
)

__version__ = "0.1.0"

__all__ = [
    "AccountEntry",
    "AnalyticsClient",
    "AnalyticsError",
    "ReportEntry",
    "create_analytics_client",
]
