"""
Request Builder - Logical filters to wire query parameters

Each resource family has its own filter dataclass and a fixed field table
mapping logical names to the camelCase names the public API expects.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from langfuse_cli.api.exceptions import ValidationError
from langfuse_cli.api.timestamps import resolve_timestamp
from langfuse_cli.api.types import MetricsQuery, ObservationType, parse_enum


class ResourceFamily(str, Enum):
    """Listable resource collections of the public API"""
    TRACES = "traces"
    SESSIONS = "sessions"
    OBSERVATIONS = "observations"
    SCORES = "scores"

    @property
    def path(self) -> str:
        return f"/api/public/{self.value}"


METRICS_PATH = "/api/public/metrics"


@dataclass(frozen=True)
class TraceFilters:
    user_id: Optional[str] = None
    name: Optional[str] = None
    session_id: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    from_timestamp: Optional[str] = None
    to_timestamp: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class SessionFilters:
    from_timestamp: Optional[str] = None
    to_timestamp: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class ObservationFilters:
    name: Optional[str] = None
    user_id: Optional[str] = None
    trace_id: Optional[str] = None
    type: Optional[Union[str, ObservationType]] = None
    from_timestamp: Optional[str] = None
    to_timestamp: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class ScoreFilters:
    name: Optional[str] = None
    from_timestamp: Optional[str] = None
    to_timestamp: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


Filters = Union[TraceFilters, SessionFilters, ObservationFilters, ScoreFilters]

# (attribute, wire name, resolve as timestamp)
FieldMap = List[Tuple[str, str, bool]]

FIELD_MAPS: Dict[ResourceFamily, FieldMap] = {
    ResourceFamily.TRACES: [
        ("user_id", "userId", False),
        ("name", "name", False),
        ("session_id", "sessionId", False),
        ("tags", "tags", False),
        ("from_timestamp", "fromTimestamp", True),
        ("to_timestamp", "toTimestamp", True),
        ("page", "page", False),
        ("limit", "limit", False),
    ],
    ResourceFamily.SESSIONS: [
        ("from_timestamp", "fromTimestamp", True),
        ("to_timestamp", "toTimestamp", True),
        ("page", "page", False),
        ("limit", "limit", False),
    ],
    ResourceFamily.OBSERVATIONS: [
        ("name", "name", False),
        ("user_id", "userId", False),
        ("trace_id", "traceId", False),
        ("type", "type", False),
        ("from_timestamp", "fromTimestamp", True),
        ("to_timestamp", "toTimestamp", True),
        ("page", "page", False),
        ("limit", "limit", False),
    ],
    ResourceFamily.SCORES: [
        ("name", "name", False),
        ("from_timestamp", "fromTimestamp", True),
        ("to_timestamp", "toTimestamp", True),
        ("page", "page", False),
        ("limit", "limit", False),
    ],
}

FILTER_TYPES = {
    ResourceFamily.TRACES: TraceFilters,
    ResourceFamily.SESSIONS: SessionFilters,
    ResourceFamily.OBSERVATIONS: ObservationFilters,
    ResourceFamily.SCORES: ScoreFilters,
}

# Short logical names accepted in plain filter mappings
FILTER_ALIASES = {
    "from": "from_timestamp",
    "to": "to_timestamp",
}


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, (list, tuple)) and len(value) == 0)


def make_filters(
    family: Union[str, ResourceFamily],
    filters: Optional[Mapping[str, Any]] = None,
) -> Filters:
    """
    Build the family's filter dataclass from a plain mapping

    Keys not known to the family are ignored; "from" and "to" are accepted
    as aliases of from_timestamp and to_timestamp.
    """
    family = ResourceFamily(family)
    filter_cls = FILTER_TYPES[family]
    known = {f.name for f in fields(filter_cls)}

    kwargs = {}
    for key, value in (filters or {}).items():
        name = FILTER_ALIASES.get(key, key)
        if name in known and not _is_unset(value):
            kwargs[name] = tuple(value) if isinstance(value, list) else value
    return filter_cls(**kwargs)


def build_query(
    family: Union[str, ResourceFamily],
    filters: Union[Filters, Mapping[str, Any], None] = None,
) -> Dict[str, Any]:
    """
    Map a filter set to the wire query for a resource family

    Args:
        family: Resource family whose field table applies
        filters: Filter dataclass or plain mapping of logical names

    Returns:
        Dict of wire parameter names; unset filters are left out entirely

    Raises:
        ValidationError: If an observations type filter is not a known type
    """
    family = ResourceFamily(family)
    if filters is None or isinstance(filters, Mapping):
        filters = make_filters(family, filters)
    elif not isinstance(filters, FILTER_TYPES[family]):
        raise TypeError(
            f"{type(filters).__name__} cannot be used to filter {family.value}"
        )

    query: Dict[str, Any] = {}
    for attr, wire_name, is_time in FIELD_MAPS[family]:
        value = getattr(filters, attr)
        if _is_unset(value):
            continue
        if is_time:
            value = resolve_timestamp(value)
        elif attr == "type":
            value = parse_enum(ObservationType, value, "type").value
        elif attr == "tags":
            value = list(value) if isinstance(value, (list, tuple)) else [value]
        query[wire_name] = value
    return query


def build_metrics_body(query: MetricsQuery) -> Dict[str, Any]:
    """
    Validate a metrics query and serialize it as the POST body

    Args:
        query: Metrics query as given by the caller

    Returns:
        JSON-ready dict; optional keys without a value are omitted

    Raises:
        ValidationError: If view, measure, aggregation, granularity or limit
            is invalid. Raised before anything touches the network.
    """
    if not isinstance(query, MetricsQuery):
        raise ValidationError("Metrics query must be a MetricsQuery instance")
    checked = query.validate()

    body: Dict[str, Any] = {
        "view": checked.view.value,
        "metrics": [
            {"measure": checked.measure.value, "aggregation": checked.aggregation.value}
        ],
    }
    if checked.dimensions:
        body["dimensions"] = [{"field": dimension} for dimension in checked.dimensions]
    if checked.from_timestamp:
        body["fromTimestamp"] = resolve_timestamp(checked.from_timestamp)
    if checked.to_timestamp:
        body["toTimestamp"] = resolve_timestamp(checked.to_timestamp)
    if checked.granularity is not None:
        body["timeDimension"] = {"granularity": checked.granularity.value}
    if checked.limit is not None:
        body["limit"] = checked.limit
    return body
