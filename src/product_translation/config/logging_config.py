"""
Logging configuration for the product translation pipeline.

All pipeline modules log through the standard library ``logging`` package.
The root logger is configured once at startup by the CLI scripts; modules
obtain their own loggers with ``get_logger(__name__)``.

Usage:
    from product_translation.config.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Translating %d products", len(products))

License: MIT
"""

import logging
import sys
from typing import Optional


# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = logging.INFO

# Logger used by psycopg2's LoggingConnection when SQL debugging is on.
SQL_LOGGER_NAME = "product_translation.sql"

# Third-party loggers that are lowered to WARNING.
NOISY_LOGGERS = (
    "urllib3",
    "urllib3.connectionpool",
    "requests",
)


# =============================================================================
# FUNCTION DEFINITIONS
# =============================================================================

def setup_logging(
    level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    suppress_third_party: bool = True
) -> None:
    """
    Configure logging for the entire application.

    Should be called once at startup, before the pipeline runs. Calling it
    again replaces the previous handler configuration.

    Args:
        level: The logging level threshold (e.g. logging.DEBUG, logging.INFO).
        log_format: Format string for log records.
        date_format: strftime format for the timestamp of each record.
        suppress_third_party: If True, HTTP client libraries only log
            warnings and errors.
    """
    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    if suppress_third_party:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: The name of the logger, typically the module's __name__.
            If None, returns the root logger.

    Returns:
        logging.Logger: The logger, inheriting the root configuration.
    """
    return logging.getLogger(name)


def set_log_level(level: int, logger_name: Optional[str] = None) -> None:
    """
    Change the log level of one logger (or the root logger) at runtime.

    Example:
        >>> # Only show the SQL statements of the repository
        >>> set_log_level(logging.DEBUG, "product_translation.sql")
    """
    logging.getLogger(logger_name).setLevel(level)
