"""
Logging setup for the application.

Configures the root logger once; modules log through
``logging.getLogger(__name__)``.
"""

import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger if no handler is installed yet.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")

    Returns:
        The root logger
    """
    logger = logging.getLogger()
    if not logger.handlers:
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
