"""
Structured Logging Framework

Core logging infrastructure using structlog over the stdlib logging module,
with a human-readable console renderer or JSON lines, and an optional
rotating log file.
"""

import logging
import logging.handlers
import sys
import traceback
from pathlib import Path
from typing import List, Optional

import structlog

from ..config.schema import LoggingConfig


class DetailedConsoleFormatter(logging.Formatter):
    """Console formatter that appends full tracebacks for errors."""

    def format(self, record):
        formatted = super().format(record)

        if record.exc_info and not record.exc_text:
            tb_lines = traceback.format_exception(*record.exc_info)
            formatted += "\n" + "".join(tb_lines)

        return formatted


class StructuredLogger:
    """Structured logger using structlog with console or JSON rendering."""

    def __init__(self, config: LoggingConfig):
        """Initialize structured logger.

        Args:
            config: Logging configuration
        """
        self.config = config
        self._configured = False
        self.logger = None
        self.file_handler: Optional[logging.Handler] = None

    def _get_processors(self) -> List:
        """Build the structlog processor chain for the configured format."""
        processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if self.config.format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        return processors

    def configure(self) -> None:
        """Configure stdlib handlers and structlog."""
        if self._configured:
            return

        log_level = getattr(logging, self.config.level.upper())

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        # structlog renders the full event, the stdlib side only prints it
        console_handler.setFormatter(DetailedConsoleFormatter(fmt="%(message)s"))
        root_logger.addHandler(console_handler)

        if self.config.file:
            self._setup_file_logging(root_logger, log_level)

        structlog.configure(
            processors=self._get_processors(),
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self._configured = True
        self.logger = structlog.get_logger("smart_dns")

    def _setup_file_logging(self, root_logger: logging.Logger, log_level: int) -> None:
        """Attach a rotating file handler to the root logger."""
        log_path = Path(self.config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        self.file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=self.config.max_size_mb * 1024 * 1024,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        self.file_handler.setLevel(log_level)
        self.file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(self.file_handler)

    def get_logger(self, name: str = "smart_dns") -> structlog.stdlib.BoundLogger:
        """Get a structured logger instance.

        Args:
            name: Logger name

        Returns:
            Structured logger instance
        """
        if not self._configured:
            self.configure()

        return structlog.get_logger(name)


# Global logger instance
_logger_instance: Optional[StructuredLogger] = None


def setup_logging(config: LoggingConfig) -> StructuredLogger:
    """Setup global logging configuration.

    Args:
        config: Logging configuration
    """
    global _logger_instance
    _logger_instance = StructuredLogger(config)
    _logger_instance.configure()
    return _logger_instance


def get_logger(name: str = "smart_dns"):
    """Get a logger instance.

    Library code logs through this before any setup_logging() call. Until
    then events go to the stdlib logger of the same name, which stays silent
    unless the application configures logging.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    if _logger_instance is None:
        return structlog.wrap_logger(logging.getLogger(name))

    return _logger_instance.get_logger(name)


def log_exception(logger, message: str, exc: Optional[BaseException] = None) -> None:
    """Log an exception with detailed traceback information.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance (optional, will use current exception if None)
    """
    if exc is None:
        exc = sys.exc_info()[1]

    if exc is None:
        logger.error(message)
        return

    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.error(
        message,
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        traceback=tb_str,
    )
