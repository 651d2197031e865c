"""Logger factory that configures logging on first use."""

import logging
from threading import Lock
from typing import Optional, Union

from ..config.settings import get_settings
from .config import setup_logging_configuration

_logging_configured = False
_configuration_lock = Lock()


def get_logger(name: Optional[str] = None, **extra_context) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Get a logger, configuring the logging system if nobody has yet.

    Args:
        name: Logger name, typically ``__name__``.
        **extra_context: Context attached to every record from this logger.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Batch stored", extra={"batch": 3, "rows": 50})

        ingest_logger = get_logger(__name__, source="data.txt")
        ```
    """
    configure_logging()

    base_logger = logging.getLogger(name or "ragchat")
    if extra_context:
        return logging.LoggerAdapter(base_logger, extra_context)
    return base_logger


def configure_logging() -> None:
    """Configure logging once per process."""
    global _logging_configured

    if _logging_configured:
        return

    with _configuration_lock:
        if _logging_configured:
            return
        setup_logging_configuration()
        _logging_configured = True

        settings = get_settings()
        logging.getLogger(__name__).debug(
            f"Logging configured for {settings.ENVIRONMENT.value} environment",
            extra={"log_level": settings.LOG_LEVEL, "file_enabled": settings.LOG_FILE_ENABLED},
        )
