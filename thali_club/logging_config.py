"""
Logging configuration for the Veg Thali Club catering site.

Request handlers and the snapshot writer thread log through the same
handler, so each line carries the thread name; a snapshot save shows up as
``snapshot-writer`` rather than the worker that handled the request.

Usage:
    from thali_club.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Libraries that log every request, relay call or statement at INFO
QUIET_LOGGERS = ("urllib3", "sqlalchemy.engine", "slowapi", "uvicorn.access")


def resolve_level(level: str = None) -> str:
    """Normalize a level name, falling back to LOG_LEVEL and then INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    return level if level in VALID_LEVELS else "INFO"


def setup_logging(level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.
    """
    level = resolve_level(level)
    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
    )

    logging.getLogger("thali_club").setLevel(numeric_level)

    # At DEBUG the SQL and relay traffic is what you want to see
    quiet_level = logging.NOTSET if level == "DEBUG" else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
