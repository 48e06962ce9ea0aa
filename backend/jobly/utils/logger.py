"""
Logging Configuration

Structured logging setup using structlog for consistent, JSON-formatted logs
throughout the Jobly application.
"""

import logging
import sys
from typing import Any, Optional
from pathlib import Path

import structlog
from structlog.stdlib import LoggerFactory
from pythonjsonlogger.json import JsonFormatter

from jobly.core.config import get_settings


def configure_logging() -> None:
    """Configure structured logging for the application."""
    settings = get_settings()

    structlog.configure(
        processors=[
            # Add log level and timestamp
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),

            # Add context
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,

            # JSON formatting for production, pretty for development
            structlog.dev.ConsoleRenderer() if settings.DEBUG
            else structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    # File handler for persistent logging
    if settings.LOG_DIR:
        logs_dir = Path(settings.LOG_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(logs_dir / "jobly.log", encoding="utf-8")
        file_handler.setFormatter(
            JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name)


def log_api_request(
    method: str,
    path: str,
    status_code: Optional[int] = None,
    **kwargs: Any
) -> None:
    """
    Log API request.

    Args:
        method: HTTP method
        path: Request path
        status_code: Response status code
        **kwargs: Additional request data
    """
    logger = get_logger("api_requests")
    logger.info(
        "API request",
        method=method,
        path=path,
        status_code=status_code,
        **kwargs
    )


def log_database_operation(
    operation: str,
    table: str,
    record_id: Any = None,
    **kwargs: Any
) -> None:
    """
    Log database operation.

    Args:
        operation: Type of operation (create, update, delete)
        table: Database table involved
        record_id: Key of the record being operated on
        **kwargs: Additional operation data
    """
    logger = get_logger("database")
    logger.info(
        "Database operation",
        operation=operation,
        table=table,
        record_id=record_id,
        **kwargs
    )


def log_error(
    error: Exception,
    **kwargs: Any
) -> None:
    """Log error with its type and message."""
    logger = get_logger("errors")
    logger.error(
        "Error occurred",
        error_type=type(error).__name__,
        error_message=str(error),
        **kwargs,
        exc_info=True
    )


# Configure logging on import
configure_logging()
