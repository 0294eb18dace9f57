"""Opt-in log output for the clouddb logger.

Modules log through logging.getLogger(__name__) and the package installs
no handler by default, so the host application's own setup decides where
records go. With CLOUDDB_LOGGING_ENABLED=true, Connection attaches one
handler to the "clouddb" logger. The root logger is never touched.

Supports two formats:
- text: Human-readable for local development
- json: One JSON object per line, including extra fields such as
  event, instance_id and status_code
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from pythonjsonlogger import json as jsonlogger

from clouddb.config import LoggingConfig

LOGGER_NAME = "clouddb"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ClientJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level, logger and service."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service = service_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self._service


class ClientLogHandler(logging.StreamHandler):
    """Handler installed by configure_logging(); at most one per process."""


def configure_logging(
    config: LoggingConfig, stream: TextIO | None = None
) -> ClientLogHandler | None:
    """Attach a handler to the clouddb logger if enabled in config.

    A handler from an earlier call is replaced, never stacked.

    Args:
        config: Logging configuration settings.
        stream: Output stream (default: stderr).

    Returns:
        The installed handler, or None when output is disabled.
    """
    if not config.enabled:
        return None

    logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in logger.handlers if isinstance(h, ClientLogHandler)]:
        logger.removeHandler(old)

    handler = ClientLogHandler(stream or sys.stderr)
    if config.format == "json":
        handler.setFormatter(ClientJsonFormatter(config.service_name))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    return handler
