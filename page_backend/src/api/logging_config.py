"""
Logging setup for the page backend.

setup_logging() is called once per application construction. It installs a
single stream handler on the root logger, replacing the one it installed
earlier, so building several apps in one process (as the tests do) does not
duplicate output.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_HANDLER_NAME = "page_backend"
_EXTRA_KEYS = ("path", "page_id")


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """
    Configure the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO.
        fmt: 'json' for structured output, anything else for plain text.

    Returns:
        The handler that was installed.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
