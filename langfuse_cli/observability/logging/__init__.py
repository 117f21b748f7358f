"""
Logging Module - Unified logging using structlog

Provides mainLogger for diagnostic logging. Silent until setup_logging()
attaches a handler, so library use of the API client never writes to the
terminal on its own.

Usage:
    from langfuse_cli.observability.logging import setup_logging, mainLogger
    
    setup_logging(verbose=True)
    
    mainLogger.info("request sent", method="GET", path="/api/public/traces")
"""

from .setup import (
    setup_logging,
    mainLogger,
    close_all_loggers,
)

__all__ = [
    "setup_logging",
    "mainLogger",
    "close_all_loggers",
]
