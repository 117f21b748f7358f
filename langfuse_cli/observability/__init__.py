"""
Observability Module - Diagnostic logging for the Langfuse CLI

Debug logging uses structlog and renders JSON lines. Output goes nowhere
until setup_logging() is called by the command-line layer.
"""

from .logging import (
    setup_logging,
    mainLogger,
    close_all_loggers,
)

__all__ = [
    "setup_logging",
    "mainLogger",
    "close_all_loggers",
]
