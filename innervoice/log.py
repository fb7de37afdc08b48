"""
Structured JSON-lines logging for the InnerVoice service.
"""

import json
import logging

LOGGER_NAME = "innervoice"

_EXTRA_FIELDS = ("endpoint", "language", "status_code", "error_kind")


class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include optional extra fields when present
        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_data[key] = val
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install the structured handler on the package logger (once)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(
        isinstance(h.formatter, StructuredFormatter) for h in logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate output
        logger.propagate = False

    return logger
