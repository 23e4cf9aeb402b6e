"""Request Logging — one root handler, JSON lines carrying person/caller ids.

Invariants:
    - Every line has timestamp, level, logger and message
    - person_id, caller_id, error_code and path are copied from `extra=` when set;
      any other extra attribute is dropped (no accidental payload logging)
    - setup_logging replaces its own handler on repeat calls; foreign handlers stay

Design Decisions:
    - LOG_FORMAT=text for local runs and tests, json everywhere else
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("person_id", "caller_id", "error_code", "path")

_HANDLER_NAME = "person_api"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the person_api handler on the root logger."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
