import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from places_relay.core.config import settings

# Context fields rendered ahead of the message, in this order
CONTEXT_FIELDS = ("path", "category", "page", "radius")


class RelayLogger:
    """
    Named relay logger writing to a rotating file and the console.
    `log` accepts relay context (request path, category, page, radius) so
    fan-out and pagination lines can be grepped per category or per page.
    """
    def __init__(
        self, level=20, logger_name="PlacesRelay", log_directory="logs", log_file="relay.log"
    ):
        self.level = level
        self.log_directory = os.path.abspath(log_directory)
        self.log_file_path = os.path.join(self.log_directory, log_file)
        self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        self.logger = logging.getLogger(logger_name)
        try:
            self._attach_handlers()
        except OSError as e:
            # Unwritable log directory: keep console output only
            print(f"Relay file logging disabled: {str(e)}")
            self._attach_console_only()

    def _console_handler(self, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(self.level)
        handler.setFormatter(formatter)
        return handler

    def _attach_handlers(self):
        self.logger.setLevel(self.level)
        if self.logger.handlers:
            return
        os.makedirs(self.log_directory, exist_ok=True)
        formatter = logging.Formatter(self.log_format)

        file_handler = RotatingFileHandler(
            self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
        )
        file_handler.setLevel(self.level)
        file_handler.setFormatter(formatter)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(self._console_handler(formatter))

    def _attach_console_only(self):
        if not self.logger.handlers:
            self.logger.addHandler(self._console_handler(logging.Formatter(self.log_format)))
        self.logger.setLevel(self.level)

    @staticmethod
    def format_message(message: str, extra: Optional[Dict[str, Any]] = None, **context: Any) -> str:
        tags = " ".join(
            f"{field}={context[field]}" for field in CONTEXT_FIELDS if context.get(field) is not None
        )
        if tags:
            message = f"[{tags}] {message}"
        if extra:
            message = f"{message} | {extra}"
        return message

    def log(self, level: int, message: str, extra: dict = None, **context: Any):
        """Log with optional relay context, e.g. logs.log(WARNING, "failed", category="bars")."""
        self.logger.log(level, self.format_message(message, extra, **context))


logs = RelayLogger(
    level=settings.LOGGER,
    logger_name="PLACES-RELAY",
    log_directory=settings.LOG_DIRECTORY,
)
