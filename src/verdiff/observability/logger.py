"""Structured JSON logging for verdiff.

Each record is rendered as one JSON object per line, e.g.::

    {"ts": "2026-10-18T09:12:01.402311+00:00", "level": "INFO",
     "logger": "verdiff.versioning", "message": "resource version created",
     "resource_id": "tpl-1", "version": "1.2.0", "blocks": 7}

Structured fields travel on the record as ``extra_fields``; :func:`log_event`
is a shorthand for attaching them.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Render a :class:`logging.LogRecord` as a single-line JSON object.

    Guaranteed keys are ``ts`` (UTC ISO-8601), ``level``, ``logger`` and
    ``message``.  A dict stored on the record as ``extra_fields`` is merged
    into the top level; formatted exception and stack information are added
    under ``exception`` and ``stack_info`` when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields:
            entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


# One handler per logger name; repeated get_logger calls reuse it.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "verdiff",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the logger *name* with a :class:`StructuredFormatter` handler.

    Parameters
    ----------
    name:
        Logger name, ``"verdiff"`` by default.  Sub-modules use dotted
        children such as ``"verdiff.diff"``.
    level:
        Level applied the first time the logger is configured.  Accepts an
        ``int`` or a case-insensitive level name.
    stream:
        Handler stream, ``sys.stderr`` by default.

    Returns
    -------
    logging.Logger
        The configured logger.  Handlers are attached only once per name.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper()) if isinstance(level, str) else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    """Log *message* at *level* with *fields* as structured extra fields."""
    logger.log(level, message, extra={"extra_fields": fields})
