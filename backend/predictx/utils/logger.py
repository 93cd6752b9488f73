"""
Logger configuration for the PredictX API.
"""
import json
import logging
import sys
from datetime import datetime


class JsonFormatter(logging.Formatter):
    """Formatter that outputs log records as JSON lines."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": str(record.exc_info[0].__name__),
                "message": str(record.exc_info[1]),
            }

        return json.dumps(log_data)


def setup_logging(app):
    """Configure the package logger from app config."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if app.config.get("LOG_JSON"):
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    package_logger = logging.getLogger("predictx")
    for existing in package_logger.handlers[:]:
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    app.logger.setLevel(level)
    return package_logger
