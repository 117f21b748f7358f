"""
Langfuse CLI - Command-line access to Langfuse traces, sessions, observations, scores and metrics
"""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("lf-cli")
except importlib.metadata.PackageNotFoundError:
    # Development mode fallback
    __version__ = "0.1.0"

from langfuse_cli.api import (
    Client,
    Credentials,
    MetricsQuery,
    RetryPolicy,
    LangfuseCLIError,
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    ValidationError,
    ConfigurationError,
)
from langfuse_cli.config import Config

__all__ = [
    # API
    "Client",
    "Credentials",
    "MetricsQuery",
    "RetryPolicy",
    # Exceptions
    "LangfuseCLIError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "TimeoutError",
    "ValidationError",
    "ConfigurationError",
    # Config
    "Config",
]
