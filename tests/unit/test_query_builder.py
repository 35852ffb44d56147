"""
Unit tests for the query parameter builder.
"""

import pytest
from datetime import date

from ga_feed.services.analytics.query_builder import (
    QueryParameterBuilder,
    one_month_before,
)


TODAY = date(2026, 10, 19)


@pytest.fixture
def builder():
    return QueryParameterBuilder(dev_mode=False)


def build(builder, **kwargs):
    kwargs.setdefault("report_id", "12345")
    kwargs.setdefault("dimensions", ["browser"])
    kwargs.setdefault("metrics", ["pageviews"])
    kwargs.setdefault("today", TODAY)
    return builder.build_report_parameters(**kwargs)


class TestReportParameters:
    """Test report feed parameters."""

    def test_defaults(self, builder):
        """Test the full parameter set for a minimal query."""
        params = build(builder)

        assert params == {
            "ids": "ga:12345",
            "dimensions": "ga:browser",
            "metrics": "ga:pageviews",
            "sort": "ga:pageviews",
            "start-date": "2026-09-19",
            "start-index": "1",
            "max-results": "20",
            "prettyprint": "false",
        }

    def test_parameter_order(self, builder):
        params = build(
            builder,
            filters="browser==Firefox",
            start_date="2026-01-01",
            end_date="2026-01-31",
        )
        assert list(params) == [
            "ids", "dimensions", "metrics", "sort", "filters",
            "start-date", "end-date", "start-index", "max-results", "prettyprint",
        ]

    def test_names_keep_input_order(self, builder):
        """Test dimensions and metrics are joined in the order given."""
        params = build(
            builder,
            dimensions=["country", "browser", "city"],
            metrics=["visits", "pageviews"],
        )
        assert params["dimensions"] == "ga:country,ga:browser,ga:city"
        assert params["metrics"] == "ga:visits,ga:pageviews"

    def test_single_string_names(self, builder):
        params = build(builder, dimensions="browser", metrics="visits")
        assert params["dimensions"] == "ga:browser"
        assert params["metrics"] == "ga:visits"

    def test_default_sort_uses_all_metrics(self, builder):
        params = build(builder, metrics=["visits", "pageviews"])
        assert params["sort"] == "ga:visits,ga:pageviews"

    def test_empty_sort_uses_metrics(self, builder):
        assert build(builder, sort=[])["sort"] == "ga:pageviews"

    def test_descending_sort_keeps_minus_outside_prefix(self, builder):
        assert build(builder, sort="-pageviews")["sort"] == "-ga:pageviews"

    def test_sort_list(self, builder):
        params = build(builder, sort=["-visits", "browser", "-pageviews"])
        assert params["sort"] == "-ga:visits,ga:browser,-ga:pageviews"

    def test_filter_is_compiled(self, builder):
        params = build(builder, filters="pageviews>100 && browser==Firefox")
        assert params["filters"] == "ga%3Apageviews%3E100%3Bga%3Abrowser%3D%3DFirefox"

    @pytest.mark.parametrize("filters", [None, "", "''"])
    def test_empty_filter_is_omitted(self, builder, filters):
        assert "filters" not in build(builder, filters=filters)

    def test_explicit_dates_pass_through(self, builder):
        params = build(builder, start_date="2026-01-01", end_date="2026-01-31")
        assert params["start-date"] == "2026-01-01"
        assert params["end-date"] == "2026-01-31"

    def test_date_objects_are_formatted(self, builder):
        params = build(builder, start_date=date(2026, 2, 3), end_date=date(2026, 2, 10))
        assert params["start-date"] == "2026-02-03"
        assert params["end-date"] == "2026-02-10"

    def test_missing_end_date_is_omitted(self, builder):
        assert "end-date" not in build(builder)

    def test_paging(self, builder):
        params = build(builder, start_index=21, max_results=50)
        assert params["start-index"] == "21"
        assert params["max-results"] == "50"

    def test_dev_mode_enables_prettyprint(self):
        params = build(QueryParameterBuilder(dev_mode=True))
        assert params["prettyprint"] == "true"


class TestAccountParameters:
    """Test account feed parameters."""

    def test_defaults(self, builder):
        assert builder.build_account_parameters() == {
            "start-index": "1",
            "max-results": "20",
        }

    def test_paging(self, builder):
        assert builder.build_account_parameters(5, 100) == {
            "start-index": "5",
            "max-results": "100",
        }


class TestOneMonthBefore:
    """Test default start date calculation."""

    @pytest.mark.parametrize("reference,expected", [
        (date(2026, 10, 19), date(2026, 9, 19)),
        (date(2026, 1, 15), date(2025, 12, 15)),
        (date(2026, 3, 31), date(2026, 2, 28)),
        (date(2028, 3, 30), date(2028, 2, 29)),
        (date(2026, 5, 31), date(2026, 4, 30)),
    ])
    def test_one_month_before(self, reference, expected):
        assert one_month_before(reference) == expected
