"""Unified logging configuration using structlog"""

import sys
import json
import logging
import structlog
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOGGER_NAME = "langfuse_cli.main"

# State tracking
_logging_initialized = False


def _json_formatter(logger, method_name, event_dict):
    """Custom formatter that outputs clean JSON lines"""
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": event_dict.pop("level", "info"),
    }

    if "logger" in event_dict:
        log_data["logger"] = event_dict.pop("logger")

    if "event" in event_dict:
        log_data["message"] = event_dict.pop("event")

    log_data.update(event_dict)

    return json.dumps(log_data, ensure_ascii=False, default=str)


# Configure standard logging backend with NullHandler (silent before setup)
stdlib_logger = logging.getLogger(LOGGER_NAME)
stdlib_logger.addHandler(logging.NullHandler())
stdlib_logger.propagate = False
stdlib_logger.setLevel(logging.DEBUG)

# Configure structlog once at module load time
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _json_formatter,
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

# Create global logger instance (ready to use, silent before setup)
mainLogger = structlog.get_logger(LOGGER_NAME)


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Attach handlers to mainLogger

    Without verbose or debug nothing reaches stderr; command output and
    error messages are the only terminal output. A log file, when given,
    always receives DEBUG records.

    Args:
        verbose: Emit INFO records to stderr
        debug: Emit DEBUG records to stderr (wire-level request logging)
        log_file: Optional path of a file to append JSON log lines to
    """
    global _logging_initialized

    if _logging_initialized:
        return

    main_logger = logging.getLogger(LOGGER_NAME)
    if not (verbose or debug or log_file):
        _logging_initialized = True
        return

    main_logger.handlers.clear()  # Remove NullHandler

    if verbose or debug:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        main_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        main_logger.addHandler(file_handler)

    _logging_initialized = True

    mainLogger.debug(
        "Logging initialized",
        verbose=verbose,
        debug=debug,
        log_file=log_file,
    )


def close_all_loggers():
    """Close all logger handlers and restore the silent NullHandler"""
    global _logging_initialized

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.addHandler(logging.NullHandler())
    _logging_initialized = False
