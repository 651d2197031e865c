"""Centralized logging infrastructure.

Usage:
    ```python
    from ragchat.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Search finished", extra={"hits": 5})
    ```
"""

from .config import configure_testing_logging, setup_logging_configuration
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "setup_logging_configuration",
]
