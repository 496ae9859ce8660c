"""Process-wide logging setup."""

import json
import logging
from typing import Optional

from bridge_history.shared.config import settings

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logging for scripts and services using the batch store.

    Args:
        level: Log level name, defaults to settings.log_level
        log_format: "text" or "json", defaults to settings.log_format
    """
    level = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    logging.getLogger(__name__).debug(f"Logging configured: level={level} format={log_format}")
