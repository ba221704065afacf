"""Logging configuration for the playlog CLI."""

import logging
import sys

from playlog.constants import TEXT_LOG_FORMAT, LogFormat, ServiceName
from playlog.logging.formatter import JSONLogFormatter


def configure_logging(
    level: str | int = logging.INFO,
    log_format: LogFormat = LogFormat.TEXT,
    service: ServiceName = ServiceName.PLAYLOG,
) -> None:
    """Set up a single stdout handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    if log_format == LogFormat.JSON:
        handler.setFormatter(JSONLogFormatter(service=service))
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))
    root.addHandler(handler)
