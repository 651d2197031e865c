"""Environment-aware logging setup.

- Development / local: detailed console output with colors
- Staging: structured key=value console output, optional file
- Production: JSON console output, noisy third-party loggers quieted
"""

import logging

from ..config.settings import EnvironmentOption, Settings, get_settings
from .handlers import create_console_handler, create_file_handler, create_null_handler

NOISY_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "openai": logging.WARNING,
    "asyncpg": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "sentence_transformers": logging.WARNING,
}


def setup_logging_configuration(settings: Settings | None = None) -> None:
    """Configure the root logger from application settings."""
    settings = settings or get_settings()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
            level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
            handlers.append(create_console_handler(format_type="json", level=level, use_colors=False))
        elif settings.ENVIRONMENT == EnvironmentOption.STAGING:
            handlers.append(
                create_console_handler(format_type="structured", level=settings.LOG_LEVEL_INT, use_colors=False)
            )
        else:
            level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
            handlers.append(create_console_handler(format_type=settings.LOG_FORMAT, level=level, use_colors=True))

    if settings.LOG_FILE_ENABLED:
        handlers.append(
            create_file_handler(
                filepath=settings.LOG_FILE_PATH,
                format_type="structured",
                level=logging.DEBUG,
                max_bytes=settings.LOG_FILE_MAX_SIZE,
                backup_count=settings.LOG_FILE_BACKUP_COUNT,
            )
        )

    for handler in handlers:
        root_logger.addHandler(handler)

    root_logger.setLevel(logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT)

    for logger_name, level in NOISY_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(level)

    if settings.LOG_SQL_QUERIES:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def configure_testing_logging() -> None:
    """Silence everything below ERROR; used from test fixtures."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(create_null_handler())
    root_logger.setLevel(logging.ERROR)
