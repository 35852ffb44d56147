"""
Feed mapper: XML feed documents to entry models.

The account and report feeds are Atom documents extended with two
vocabularies:

- OpenSearch (``totalResults``, ``startIndex``, ``itemsPerPage``)
- the analytics data export namespace (``dxp:``), carrying properties,
  metrics, dimensions, aggregates and the data source description

Optional sections (aggregates, dataSource) may be missing; they map to
empty values rather than errors. A document that is not well-formed XML
fails the whole call.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .entries import AccountEntry, FeedValue, MetricValue, ReportEntry
from .exceptions import FeedParseError

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
ANALYTICS_NS = "http://schemas.google.com/analytics/2009"
OPENSEARCH_NAMESPACES = (
    "http://a9.com/-/spec/opensearchrss/1.0/",
    "http://a9.com/-/spec/opensearch/1.1/",
)

# Decimal or scientific notation; everything else is an integer
FLOAT_PATTERN = re.compile(r"^-?\d+\.\d+$|^-?\d+(\.\d+)?[eE][-+]?\d+$")
INTEGER_PREFIX_PATTERN = re.compile(r"[-+]?\d+")


def _atom(tag: str) -> str:
    return f"{{{ATOM_NS}}}{tag}"


def _ga(tag: str) -> str:
    return f"{{{ANALYTICS_NS}}}{tag}"


def strip_prefix(name: str) -> str:
    """Remove the ``ga:`` namespace prefix from a field name."""
    return name.replace("ga:", "")


def classify_metric_value(value: str) -> MetricValue:
    """
    Convert a metric value to float or int.

    The result depends only on the string: ``"3.14"`` and ``"1E10"`` are
    floats, everything else is read as an integer. A value with no
    leading digits (``""``, ``"n/a"``) becomes ``0``, and trailing
    garbage after the digits is ignored; both cases log a warning.
    """
    value = value.strip()
    if FLOAT_PATTERN.match(value):
        return float(value)

    match = INTEGER_PREFIX_PATTERN.match(value)
    if match is None:
        logger.warning(f'Metric value "{value}" is not numeric, using 0')
        return 0
    if match.end() != len(value):
        logger.warning(f'Metric value "{value}" has trailing characters, using {match.group()}')
    return int(match.group())


class AccountFeed(BaseModel):
    """Mapped account feed."""

    root_parameters: Dict[str, FeedValue] = Field(default_factory=dict)
    entries: List[AccountEntry] = Field(default_factory=list)


class ReportFeed(BaseModel):
    """Mapped report feed."""

    root_parameters: Dict[str, FeedValue] = Field(default_factory=dict)
    aggregate_metrics: Dict[str, MetricValue] = Field(default_factory=dict)
    entries: List[ReportEntry] = Field(default_factory=list)


class FeedMapper:
    """Maps account and report feed XML into entry models."""

    def map_account_feed(self, xml: str) -> AccountFeed:
        """
        Map an account feed document.

        Raises:
            FeedParseError: If the document is not well-formed XML
        """
        root = self._parse(xml)
        root_parameters = self._root_parameters(root)

        entries = []
        for entry in root.findall(_atom("entry")):
            properties: Dict[str, str] = {}
            for prop in entry.findall(_ga("property")):
                properties[strip_prefix(prop.get("name", ""))] = prop.get("value", "")

            table_id = entry.find(_ga("tableId"))
            if table_id is not None:
                properties["tableId"] = table_id.text or ""

            properties["title"] = self._text(entry, _atom("title"))
            properties["updated"] = self._text(entry, _atom("updated"))

            entries.append(AccountEntry(properties=properties))

        logger.debug(f"Mapped account feed with {len(entries)} entries")
        return AccountFeed(root_parameters=root_parameters, entries=entries)

    def map_report_feed(self, xml: str) -> ReportFeed:
        """
        Map a report (data) feed document.

        Raises:
            FeedParseError: If the document is not well-formed XML
        """
        root = self._parse(xml)
        root_parameters = self._root_parameters(root)

        data_source = root.find(_ga("dataSource"))
        if data_source is not None:
            for field in ("tableId", "tableName"):
                element = data_source.find(_ga(field))
                if element is not None:
                    root_parameters[field] = element.text or ""
            for prop in data_source.findall(_ga("property")):
                root_parameters[strip_prefix(prop.get("name", ""))] = prop.get("value", "")

        root_parameters["startDate"] = self._text(root, _ga("startDate"))
        root_parameters["endDate"] = self._text(root, _ga("endDate"))

        aggregate_metrics: Dict[str, MetricValue] = {}
        aggregates = root.find(_ga("aggregates"))
        if aggregates is not None:
            aggregate_metrics = self._metrics(aggregates)

        entries = []
        for entry in root.findall(_atom("entry")):
            dimensions = {
                strip_prefix(dimension.get("name", "")): dimension.get("value", "")
                for dimension in entry.findall(_ga("dimension"))
            }
            entries.append(ReportEntry(metrics=self._metrics(entry), dimensions=dimensions))

        logger.debug(
            f"Mapped report feed with {len(entries)} entries, "
            f"{len(aggregate_metrics)} aggregate metrics"
        )
        return ReportFeed(
            root_parameters=root_parameters,
            aggregate_metrics=aggregate_metrics,
            entries=entries,
        )

    def _parse(self, xml: str) -> ET.Element:
        try:
            return ET.fromstring(xml)
        except ET.ParseError as e:
            raise FeedParseError(f"Response is not a valid feed document: {e}") from e

    def _root_parameters(self, root: ET.Element) -> Dict[str, FeedValue]:
        """Feed-level fields shared by account and report feeds."""
        parameters: Dict[str, FeedValue] = {
            "updated": self._text(root, _atom("updated")),
            "generator": self._text(root, _atom("generator")),
        }

        generator = root.find(_atom("generator"))
        parameters["generatorVersion"] = generator.get("version", "") if generator is not None else ""

        for child in root:
            namespace, _, local_name = child.tag[1:].partition("}")
            if namespace in OPENSEARCH_NAMESPACES:
                try:
                    parameters[local_name] = int((child.text or "0").strip())
                except ValueError:
                    raise FeedParseError(
                        f'OpenSearch field "{local_name}" is not an integer: {child.text!r}'
                    ) from None

        return parameters

    @staticmethod
    def _metrics(parent: ET.Element) -> Dict[str, MetricValue]:
        return {
            strip_prefix(metric.get("name", "")): classify_metric_value(metric.get("value", ""))
            for metric in parent.findall(_ga("metric"))
        }

    @staticmethod
    def _text(parent: ET.Element, tag: str, default: str = "") -> str:
        element: Optional[ET.Element] = parent.find(tag)
        if element is None or element.text is None:
            return default
        return element.text.strip()
