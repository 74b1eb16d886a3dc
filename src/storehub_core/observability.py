"""Structured logging: JSON formatter and process-wide setup.

Every record carries timestamp, level, logger name and message. The extras
``action``, ``store_id``, ``version_id``, ``login`` and ``error_kind`` are
surfaced when a call site passes them through ``extra=``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

STRUCTURED_FIELDS = ("action", "store_id", "version_id", "login", "error_kind")


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in STRUCTURED_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install a single stream handler on the root logger.

    Calling it again replaces the handler installed by the previous call.
    """
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    for existing in list(logging.root.handlers):
        if getattr(existing, "_storehub", False):
            logging.root.removeHandler(existing)
    handler._storehub = True  # type: ignore[attr-defined]
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
