"""
Structured logging for the taskdesk API.

Log lines are JSON payloads so they can be shipped as-is to a log collector.
"""

import logging
import sys
from datetime import datetime, timezone
import json

from taskdesk.config import LOG_LEVEL


class StructuredLogger:
    """Structured logger writing JSON lines to stdout."""

    def __init__(self, name: str, level: int | str = logging.INFO):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level (int or level name)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        # Each structured logger owns its stdout handler
        self.logger.propagate = False

        # Prevent adding handlers multiple times
        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        self.logger.addHandler(console_handler)

    def _payload(self, level_name: str, message: str, **kwargs) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level_name,
            "message": message,
            "service": self.logger.name,
        }
        log_data.update(kwargs)
        return json.dumps(log_data, default=str)

    def _log_structured(self, level: int, message: str, **kwargs):
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._payload(logging.getLevelName(level), message, **kwargs))

    def debug(self, message: str, **kwargs):
        self._log_structured(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log_structured(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log_structured(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log_structured(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log an error together with the active traceback."""
        if self.logger.isEnabledFor(logging.ERROR):
            self.logger.exception(self._payload("ERROR", message, exception=True, **kwargs))


def get_logger(name: str = "taskdesk") -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name, usually the component emitting the events

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name, LOG_LEVEL)
