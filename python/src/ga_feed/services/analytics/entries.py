"""
Feed entry models.

AccountEntry and ReportEntry are frozen Pydantic models built once by
the feed mapper. Their mappings are read-only views over a private copy
of the data, so neither attributes nor items can change after
construction. Field names are stored without the ``ga:`` prefix and
looked up through ``get()``, which accepts the accessor-style spelling
used by the legacy API (``get("Pageviews")``, ``get("getPageviews")``,
``get("ga:pageviews")`` all resolve to ``pageviews``).
"""

from types import MappingProxyType
from typing import Annotated, Dict, Iterable, Mapping, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

from .exceptions import InvalidAccessorError

FeedValue = Union[int, float, str]
MetricValue = Union[int, float]


def _read_only(value: Dict) -> Mapping:
    return MappingProxyType(dict(value))


ReadOnlyProperties = Annotated[Dict[str, str], AfterValidator(_read_only), PlainSerializer(dict)]
ReadOnlyMetrics = Annotated[
    Dict[str, MetricValue], AfterValidator(_read_only), PlainSerializer(dict)
]


def normalize_accessor(name: str) -> str:
    """Map an accessor name onto the stored lower-camel field name."""
    if name.startswith("ga:"):
        name = name[3:]
    if len(name) > 3 and name.startswith("get") and name[3].isupper():
        name = name[3:]
    return name[:1].lower() + name[1:]


def resolve(name: str, mappings: Iterable[Mapping[str, FeedValue]]) -> FeedValue:
    """
    Look ``name`` up in each mapping in turn.

    An exact match on the normalized name wins; otherwise the first
    case-insensitive match is returned.

    Raises:
        KeyError: If no mapping holds the name
    """
    key = normalize_accessor(name)
    mappings = list(mappings)

    for mapping in mappings:
        if key in mapping:
            return mapping[key]

    folded = key.lower()
    for mapping in mappings:
        for candidate, value in mapping.items():
            if candidate.lower() == folded:
                return value

    raise KeyError(key)


class AccountEntry(BaseModel):
    """One profile from the account feed."""

    model_config = ConfigDict(frozen=True)

    properties: ReadOnlyProperties = Field(default_factory=dict, validate_default=True)

    def get(self, name: str) -> str:
        """
        Return a property by name.

        Raises:
            InvalidAccessorError: If the entry has no such property
        """
        try:
            return resolve(name, [self.properties])
        except KeyError:
            raise InvalidAccessorError(
                name, f'No valid property called "{normalize_accessor(name)}"'
            ) from None

    def __contains__(self, name: str) -> bool:
        try:
            resolve(name, [self.properties])
        except KeyError:
            return False
        return True

    def __str__(self) -> str:
        return self.properties.get("title", "")


class ReportEntry(BaseModel):
    """One row from the report feed, split into metrics and dimensions."""

    model_config = ConfigDict(frozen=True)

    metrics: ReadOnlyMetrics = Field(default_factory=dict, validate_default=True)
    dimensions: ReadOnlyProperties = Field(default_factory=dict, validate_default=True)

    def get(self, name: str) -> FeedValue:
        """
        Return a metric or dimension by name, checking metrics first.

        Raises:
            InvalidAccessorError: If neither partition holds the name
        """
        try:
            return resolve(name, [self.metrics, self.dimensions])
        except KeyError:
            raise InvalidAccessorError(
                name, f'No valid metric or dimension called "{normalize_accessor(name)}"'
            ) from None

    def __contains__(self, name: str) -> bool:
        try:
            resolve(name, [self.metrics, self.dimensions])
        except KeyError:
            return False
        return True

    def __str__(self) -> str:
        return " ".join(self.dimensions.values())
