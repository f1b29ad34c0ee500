"""Stdlib logging for the API server and the console thread viewer."""

import logging
import sys
from typing import TextIO

from skythread.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Chatty libraries on the thread fetch and container paths
_QUIET_LOGGERS = ("httpx", "httpcore", "dishka")


def log_level(settings: Settings) -> int:
    """Level for ``skythread.*`` loggers: DEBUG when debugging, WARNING under test."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings, stream: TextIO | None = None) -> None:
    """Configure root logging.

    The API server logs to stdout. The console viewer prints comments on
    stdout, so it passes ``sys.stderr`` to keep log lines out of the listing.

    Args:
        settings: Application settings
        stream: Destination for log records, stdout when omitted
    """
    level = log_level(settings)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream or sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("skythread").setLevel(level)

    logging.getLogger(__name__).info(
        "skythread logging ready (environment=%s, level=%s, appview=%s)",
        settings.environment,
        logging.getLevelName(level),
        settings.bluesky.api_base_url,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
