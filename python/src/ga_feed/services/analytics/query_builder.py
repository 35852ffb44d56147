"""
Query parameter builder for the account and report feeds.

Produces the ordered wire parameter mapping for one request. Nothing is
validated here: malformed names or dates are passed through and surface
as a rejected request.
"""

import calendar
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

from .filters import NAMESPACE_PREFIX, FilterExpressionCompiler

logger = logging.getLogger(__name__)

NameList = Union[str, Sequence[str]]
DateLike = Union[str, date]

DEFAULT_START_INDEX = 1
DEFAULT_MAX_RESULTS = 20


def one_month_before(reference_date: date) -> date:
    """
    Return the same day one calendar month earlier.

    Days that do not exist in the previous month are clamped to its
    last day (e.g. 2026-03-31 -> 2026-02-28).
    """
    if reference_date.month == 1:
        year, month = reference_date.year - 1, 12
    else:
        year, month = reference_date.year, reference_date.month - 1

    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(reference_date.day, last_day))


def _as_list(names: NameList) -> List[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


def _format_date(value: DateLike) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return value


class QueryParameterBuilder:
    """
    Builds wire parameters for feed requests.

    Example:
        >>> builder = QueryParameterBuilder(dev_mode=False)
        >>> params = builder.build_report_parameters(
        ...     report_id="12345",
        ...     dimensions=["browser"],
        ...     metrics=["pageviews"],
        ... )
        >>> params["sort"]
        'ga:pageviews'
    """

    def __init__(
        self,
        dev_mode: bool = False,
        filter_compiler: Optional[FilterExpressionCompiler] = None,
    ):
        self.dev_mode = dev_mode
        self.filter_compiler = filter_compiler or FilterExpressionCompiler()

    def build_account_parameters(
        self,
        start_index: int = DEFAULT_START_INDEX,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> Dict[str, str]:
        """Build parameters for the account feed."""
        return {
            "start-index": str(start_index),
            "max-results": str(max_results),
        }

    def build_report_parameters(
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
        today: Optional[date] = None,
    ) -> Dict[str, str]:
        """
        Build parameters for the report feed.

        Args:
            report_id: Profile/table id without the ``ga:`` prefix
            dimensions: Dimension name or names, e.g. ``["browser"]``
            metrics: Metric name or names, e.g. ``["pageviews"]``
            sort: Name or names to sort by; a leading ``-`` sorts
                descending. Defaults to the metrics, ascending.
            filters: Human-written filter expression
            start_date: Defaults to one month before ``today``
            end_date: Passed through untouched; omitted when None
            start_index: First result, 1-based
            max_results: Page size
            today: Reference date for the default start date

        Returns:
            Ordered mapping of wire parameter names to values
        """
        parameters: Dict[str, str] = {"ids": NAMESPACE_PREFIX + str(report_id)}

        parameters["dimensions"] = self.format_names(dimensions)
        parameters["metrics"] = self.format_names(metrics)

        if sort:
            parameters["sort"] = self.format_sort(sort)
        else:
            parameters["sort"] = parameters["metrics"]

        if filters:
            compiled = self.filter_compiler.compile(filters)
            if compiled is not None:
                parameters["filters"] = compiled

        if start_date is None:
            start_date = one_month_before(today or date.today())
        parameters["start-date"] = _format_date(start_date)

        if end_date is not None:
            parameters["end-date"] = _format_date(end_date)

        parameters["start-index"] = str(start_index)
        parameters["max-results"] = str(max_results)
        parameters["prettyprint"] = "true" if self.dev_mode else "false"

        logger.debug(f"Built report parameters: {parameters}")
        return parameters

    @staticmethod
    def format_names(names: NameList) -> str:
        """Prefix each name with ``ga:`` and comma-join them in order."""
        return ",".join(NAMESPACE_PREFIX + name for name in _as_list(names))

    @staticmethod
    def format_sort(sort: NameList) -> str:
        """Like format_names, keeping a leading ``-`` outside the prefix."""
        formatted = []
        for entry in _as_list(sort):
            if entry.startswith("-"):
                formatted.append("-" + NAMESPACE_PREFIX + entry[1:])  # Descending
            else:
                formatted.append(NAMESPACE_PREFIX + entry)  # Ascending
        return ",".join(formatted)
