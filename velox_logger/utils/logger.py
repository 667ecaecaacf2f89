"""Diagnostic logger for the registry's own messages."""

import logging

_PACKAGE_LOGGER = "velox_logger"


def _configure_logging() -> None:
    """Leave output to the host application; stay silent until it configures logging."""
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())


_configure_logging()


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    return logging.getLogger(name)
