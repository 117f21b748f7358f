"""
API Module - Authenticated, retrying, paginated access to the public API
"""

from langfuse_cli.api.exceptions import (
    LangfuseCLIError,
    ConfigurationError,
    ValidationError,
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
)
from langfuse_cli.api.types import (
    MetricsView,
    Measure,
    Aggregation,
    TimeGranularity,
    ObservationType,
    OutputFormat,
    MetricsQuery,
)
from langfuse_cli.api.timestamps import resolve_timestamp
from langfuse_cli.api.request_builder import (
    ResourceFamily,
    TraceFilters,
    SessionFilters,
    ObservationFilters,
    ScoreFilters,
    build_query,
    build_metrics_body,
)
from langfuse_cli.api.classifier import classify
from langfuse_cli.api.retry import RetryPolicy, retry_on_failure
from langfuse_cli.api.transport import Credentials, Transport, RawResponse
from langfuse_cli.api.paginator import Paginator
from langfuse_cli.api.client import Client

__all__ = [
    # Exceptions
    "LangfuseCLIError",
    "ConfigurationError",
    "ValidationError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "TimeoutError",
    # Types
    "MetricsView",
    "Measure",
    "Aggregation",
    "TimeGranularity",
    "ObservationType",
    "OutputFormat",
    "MetricsQuery",
    # Request building
    "resolve_timestamp",
    "ResourceFamily",
    "TraceFilters",
    "SessionFilters",
    "ObservationFilters",
    "ScoreFilters",
    "build_query",
    "build_metrics_body",
    # Transport
    "classify",
    "RetryPolicy",
    "retry_on_failure",
    "Credentials",
    "Transport",
    "RawResponse",
    "Paginator",
    # Facade
    "Client",
]
