"""
Pytest configuration and fixtures.

Provides shared fixtures for all tests including:
- Sample account and report feed documents
- Test settings
- Mock transport
"""

import pytest
from unittest.mock import Mock

from ga_feed.core.config import Settings
from ga_feed.services.analytics.transport import HttpResponse


ACCOUNT_FEED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:openSearch="http://a9.com/-/spec/opensearchrss/1.0/"
      xmlns:dxp="http://schemas.google.com/analytics/2009">
  <id>http://www.google.com/analytics/feeds/accounts/me@example.com</id>
  <updated>2026-10-18T10:15:00.000-07:00</updated>
  <title type="text">Profile list for me@example.com</title>
  <generator version="1.0">Google Analytics</generator>
  <openSearch:totalResults>2</openSearch:totalResults>
  <openSearch:startIndex>1</openSearch:startIndex>
  <openSearch:itemsPerPage>20</openSearch:itemsPerPage>
  <entry>
    <id>http://www.google.com/analytics/feeds/accounts/ga:12345</id>
    <updated>2026-10-01T08:00:00.000-07:00</updated>
    <title type="text">www.example.com</title>
    <dxp:property name="ga:accountId" value="1000"/>
    <dxp:property name="ga:accountName" value="Example"/>
    <dxp:property name="ga:profileId" value="12345"/>
    <dxp:property name="ga:webPropertyId" value="UA-1000-1"/>
    <dxp:property name="ga:currency" value="USD"/>
    <dxp:property name="ga:timezone" value="America/Los_Angeles"/>
    <dxp:tableId>ga:12345</dxp:tableId>
  </entry>
  <entry>
    <id>http://www.google.com/analytics/feeds/accounts/ga:67890</id>
    <updated>2026-09-12T08:00:00.000-07:00</updated>
    <title type="text">shop.example.com</title>
    <dxp:property name="ga:accountId" value="1000"/>
    <dxp:property name="ga:profileId" value="67890"/>
  </entry>
</feed>
"""


REPORT_FEED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:openSearch="http://a9.com/-/spec/opensearch/1.1/"
      xmlns:dxp="http://schemas.google.com/analytics/2009">
  <id>http://www.google.com/analytics/feeds/data?ids=ga:12345</id>
  <updated>2026-10-18T10:15:00.000-07:00</updated>
  <title type="text">Google Analytics Data for Profile 12345</title>
  <generator version="1.0">Google Analytics</generator>
  <openSearch:totalResults>2</openSearch:totalResults>
  <openSearch:startIndex>1</openSearch:startIndex>
  <openSearch:itemsPerPage>20</openSearch:itemsPerPage>
  <dxp:aggregates>
    <dxp:metric confidenceInterval="0.0" name="ga:pageviews" type="integer" value="230"/>
    <dxp:metric confidenceInterval="0.0" name="ga:avgTimeOnPage" type="time" value="42.5"/>
  </dxp:aggregates>
  <dxp:dataSource>
    <dxp:property name="ga:profileId" value="12345"/>
    <dxp:property name="ga:webPropertyId" value="UA-1000-1"/>
    <dxp:property name="ga:accountName" value="Example"/>
    <dxp:tableId>ga:12345</dxp:tableId>
    <dxp:tableName>www.example.com</dxp:tableName>
  </dxp:dataSource>
  <dxp:startDate>2026-09-19</dxp:startDate>
  <dxp:endDate>2026-10-19</dxp:endDate>
  <entry>
    <id>http://www.google.com/analytics/feeds/data?ids=ga:12345&amp;ga:browser=Firefox</id>
    <updated>2026-10-18T17:00:00.001-07:00</updated>
    <title type="text">ga:browser=Firefox | ga:country=Austria</title>
    <dxp:dimension name="ga:browser" value="Firefox"/>
    <dxp:dimension name="ga:country" value="Austria"/>
    <dxp:metric confidenceInterval="0.0" name="ga:pageviews" type="integer" value="150"/>
    <dxp:metric confidenceInterval="0.0" name="ga:avgTimeOnPage" type="time" value="1.2E2"/>
  </entry>
  <entry>
    <id>http://www.google.com/analytics/feeds/data?ids=ga:12345&amp;ga:browser=Safari</id>
    <updated>2026-10-18T17:00:00.001-07:00</updated>
    <title type="text">ga:browser=Safari | ga:country=Germany</title>
    <dxp:dimension name="ga:browser" value="Safari"/>
    <dxp:dimension name="ga:country" value="Germany"/>
    <dxp:metric confidenceInterval="0.0" name="ga:pageviews" type="integer" value="80"/>
    <dxp:metric confidenceInterval="0.0" name="ga:avgTimeOnPage" type="time" value="3.25"/>
  </entry>
</feed>
"""


@pytest.fixture
def account_feed_xml():
    """Account feed with two profiles."""
    return ACCOUNT_FEED_XML


@pytest.fixture
def report_feed_xml():
    """Report feed with aggregates, data source and two rows."""
    return REPORT_FEED_XML


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        GA_INTERFACE_NAME="ga-feed-client tests",
        GA_DEV_MODE=False,
        GA_REQUEST_TIMEOUT=5.0,
    )


@pytest.fixture
def mock_transport():
    """Transport mock answering every request with an empty 200."""
    transport = Mock()
    transport.request = Mock(return_value=HttpResponse(status_code=200, body=""))
    return transport
