"""Structured logging for the context store.

Nothing is configured on import. The CLI calls ``configure_from_settings``;
applications embedding the store call ``setup_logging`` themselves. Log lines
go to stderr so command output on stdout stays machine readable.
"""

import sys
import logging
from typing import List, Optional
import structlog
from structlog.stdlib import BoundLogger

from ..config.settings import Settings, settings as default_settings

def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    Configure stdlib logging and structlog. Calling it again replaces the
    previous configuration.

    Args:
        level (str): Log level (DEBUG, INFO, WARNING, ERROR)
        json_format (bool): Render JSON lines instead of console output
        log_file (Optional[str]): Also write log lines to this file
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True
    )

    processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

def configure_from_settings(app_settings: Optional[Settings] = None) -> None:
    """Apply the ``log_level``, ``log_json`` and ``log_file`` settings."""
    app_settings = app_settings or default_settings
    setup_logging(
        level=app_settings.log_level,
        json_format=app_settings.log_json,
        log_file=app_settings.log_file
    )

def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name (str): Logger name (usually __name__)

    Returns:
        BoundLogger: Configured structured logger
    """
    return structlog.get_logger(name)
