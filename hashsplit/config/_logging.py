import json
import logging
from datetime import datetime, timezone
from typing import Optional

from ._settings import get_settings


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def configure_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Attach a JSON stream handler to the ``hashsplit`` logger, once."""
    if log_level is None:
        log_level = get_settings().log_level

    package_logger = logging.getLogger("hashsplit")
    package_logger.setLevel(log_level)
    if not any(isinstance(h.formatter, JsonFormatter) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        package_logger.addHandler(handler)
    return package_logger
