"""Logging setup for the :mod:`json_hash` command line tool."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TextIO

PACKAGE_LOGGER = "json_hash"

_RESERVED_KEYS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line.

    Values passed through ``extra`` are collected under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS
        }
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "context": context,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: int = logging.WARNING,
    *,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a stream handler to the package logger.

    Args:
        level: Threshold for the package logger.
        json_output: Emit :class:`JsonFormatter` lines instead of plain text.
        stream: Target stream. Defaults to ``sys.stderr``.

    Returns:
        The installed handler, to be passed to :func:`reset_logging`.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    handler = logging.StreamHandler(stream)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )
    logger.addHandler(handler)
    return handler


def reset_logging(handler: logging.Handler) -> None:
    """Detach and close a handler installed by :func:`configure_logging`."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.removeHandler(handler)
    handler.close()
    logger.setLevel(logging.NOTSET)
