"""Request & Store Logging — one formatter for audit lines, error reports and store events.

Invariants:
    - Every line carries timestamp (UTC, ISO 8601), level, logger and message
    - Only whitelisted extras leave the process: method/path from the request log,
      status_code/error_code from the error normalizer, product_id from store mutations
    - Anything else attached to a record (headers, payloads, api keys) is never emitted
    - setup_logging owns exactly one root handler; calling it again swaps that handler

Design Decisions:
    - Plain logging.Formatter subclass: JSON lines for log shippers, text for local runs
    - default=str on json.dumps: an odd extra value degrades to its repr instead of
      dropping the whole line
"""

import json
import logging
from datetime import datetime, timezone

REQUEST_FIELDS = ("method", "path")
ERROR_FIELDS = ("status_code", "error_code")
STORE_FIELDS = ("product_id",)
EXTRA_FIELDS = REQUEST_FIELDS + ERROR_FIELDS + STORE_FIELDS

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """One JSON object per record, extras limited to `fields`."""

    def __init__(self, fields: tuple[str, ...] = EXTRA_FIELDS):
        super().__init__()
        self.fields = fields

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, record.__dict__[name])
            for name in self.fields
            if record.__dict__.get(name) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def build_formatter(fmt: str) -> logging.Formatter:
    """JSONFormatter for fmt == "json", plain text otherwise."""
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the app's root handler (replacing a previous one) and set the root level."""
    global _handler
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(fmt))
    if _handler is not None:
        logging.root.removeHandler(_handler)
    logging.root.addHandler(handler)
    _handler = handler
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
