"""
API Types - Enumerated query fields and the metrics query structure
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Type, TypeVar, Union

from langfuse_cli.api.exceptions import ValidationError


class MetricsView(str, Enum):
    """Data view a metrics query runs against"""
    TRACES = "traces"
    OBSERVATIONS = "observations"
    SCORES_NUMERIC = "scores-numeric"
    SCORES_CATEGORICAL = "scores-categorical"


class Measure(str, Enum):
    """Quantity being aggregated"""
    COUNT = "count"
    LATENCY = "latency"
    VALUE = "value"
    TOKENS = "tokens"
    COST = "cost"


class Aggregation(str, Enum):
    """Aggregation function applied to the measure"""
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    P50 = "p50"
    P95 = "p95"
    P99 = "p99"
    MIN = "min"
    MAX = "max"
    HISTOGRAM = "histogram"


class TimeGranularity(str, Enum):
    """Bucket size of the time dimension"""
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    AUTO = "auto"


class ObservationType(str, Enum):
    """Observation kinds accepted by the observations filter"""
    GENERATION = "generation"
    SPAN = "span"
    EVENT = "event"


class OutputFormat(str, Enum):
    """Rendering formats offered by the CLI"""
    TABLE = "table"
    JSON = "json"
    CSV = "csv"
    MARKDOWN = "markdown"


E = TypeVar("E", bound=Enum)


def enum_values(enum_cls: Type[Enum]) -> List[str]:
    """Wire values of an enum, in declaration order"""
    return [member.value for member in enum_cls]


def parse_enum(enum_cls: Type[E], value: Union[str, E], field_name: str) -> E:
    """
    Convert a raw value into a member of enum_cls

    Args:
        enum_cls: Closed set the value must belong to
        value: Raw string (or an existing member)
        field_name: Field name used in the error message

    Returns:
        The matching enum member

    Raises:
        ValidationError: If value is not one of the enum's values
    """
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value == value:
            return member
    raise ValidationError(
        f"Invalid {field_name} '{value}'. "
        f"Valid values: {', '.join(enum_values(enum_cls))}",
        field=field_name,
        value=value,
    )


@dataclass(frozen=True)
class MetricsQuery:
    """
    Aggregate metrics query

    view, measure and aggregation are required; everything else is optional
    and omitted from the request body when unset.
    """
    view: Union[str, MetricsView]
    measure: Union[str, Measure]
    aggregation: Union[str, Aggregation]
    dimensions: Optional[List[str]] = field(default=None)
    from_timestamp: Optional[str] = None
    to_timestamp: Optional[str] = None
    granularity: Optional[Union[str, TimeGranularity]] = None
    limit: Optional[int] = 100

    def validate(self) -> "MetricsQuery":
        """
        Check every enumerated field against its closed set

        Returns:
            A copy of the query with enum members in place of raw strings

        Raises:
            ValidationError: On the first field holding an unknown value
        """
        view = parse_enum(MetricsView, self.view, "view")
        measure = parse_enum(Measure, self.measure, "measure")
        aggregation = parse_enum(Aggregation, self.aggregation, "aggregation")

        granularity = None
        if self.granularity is not None:
            granularity = parse_enum(TimeGranularity, self.granularity, "granularity")

        if self.limit is not None and (isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1):
            raise ValidationError(
                f"Invalid limit '{self.limit}'. Limit must be a positive integer",
                field="limit",
                value=self.limit,
            )

        return MetricsQuery(
            view=view,
            measure=measure,
            aggregation=aggregation,
            dimensions=list(self.dimensions) if self.dimensions else None,
            from_timestamp=self.from_timestamp,
            to_timestamp=self.to_timestamp,
            granularity=granularity,
            limit=self.limit,
        )
