"""Structured Logging — one JSON object per line for the SageNest API.

Invariants:
    - Every record carries timestamp, level, logger and message
    - Calculator rejections surface "method"; error handlers surface
      "error_code", "path" and "status_code"
    - User-submitted text (markdown bodies, dates) is never logged, only outcomes
    - LOG_FORMAT=text switches to a single-line human format for local runs

Design Decisions:
    - stdlib logging + json: records come from logging.getLogger(__name__) in
      every module, so the formatter is the only place that shapes output
    - setup_logging replaces its own handler on repeat calls (lifespan re-entry
      under reload) instead of stacking a second one
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = ("method", "error_code", "path", "status_code")
_HANDLER_NAME = "sagenest"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record plus any known extra fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the SageNest handler on the root logger and return it."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
