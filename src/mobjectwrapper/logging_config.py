"""
Logging Configuration
=====================
Configures the `mobjectwrapper` namespace logger used by the model, the
renderers and the IO layer. Library code only calls `logging.getLogger(__name__)`;
handlers are attached here, once, by the CLI or by an embedding application.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mobjectwrapper"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach a stdout handler (and optionally a file handler) to the package logger.

    Calling it again replaces the previous handlers, so kind-change and IO
    messages are never emitted twice.

    Args:
        level: Logging level for the package logger and its handlers.
        log_file: Optional path; the file is truncated on each call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(
        f"mobjectwrapper logging at {logging.getLevelName(level)}"
        + (f", mirrored to {log_file}" if log_file else "")
    )
