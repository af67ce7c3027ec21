from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

APP_NAME = "workers_management"

# Attributes every LogRecord carries; anything else on a record came from `extra=`.
_STANDARD_ATTRS = frozenset(logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: event name, level, app, then the `extra` fields."""

    def __init__(self, app: str = APP_NAME):
        super().__init__()
        self._app = app

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "app": self._app,
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_json_logging(level: str | int = logging.INFO, *, app: str = APP_NAME) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(app))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
