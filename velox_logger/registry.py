"""Named logger registry with a main-logger fallback.

Usage::

    from velox_logger.registry import load_configuration, logger

    load_configuration({"level": "info"})
    load_configuration("service", {"level": "debug", "logDir": "/var/log/app", "filename": "service.log"})

    logger("service").debug("written to /var/log/app/service.log")
    logger("unknown").info("falls back to the main logger")
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from config.settings import Settings, settings as default_settings
from velox_logger.caller import infer_logger_name
from velox_logger.handlers import console_handler, create_handler
from velox_logger.models import ConfigurationError, LoggerConfiguration, parse_configuration
from velox_logger.utils.logger import get_logger

log = get_logger(__name__)

MAIN_LABEL = "MAIN"
DEFAULT_LABEL = "DEFAULT"
NO_CONFIGURATION_WARNING = "No logging configuration loaded, use default debug logging"

ConfigurationInput = Union[LoggerConfiguration, Mapping[str, Any]]


class _MainKey:
    """Registry key of the main logger; never equal to a user-supplied name."""

    def __repr__(self) -> str:
        return "<main>"


MAIN = _MainKey()


def _build_logger(label: str, level: int, handler: logging.Handler) -> logging.Logger:
    # Not registered with logging's manager; owned by the registry.
    handle = logging.Logger(label, level)
    handle.propagate = False
    handle.addHandler(handler)
    return handle


def _release_handlers(handle: logging.Logger) -> None:
    # Replaced loggers keep their handlers; file streams reopen on the next write.
    for handler in handle.handlers:
        handler.close()


def _close_handlers(handle: logging.Logger) -> None:
    for handler in list(handle.handlers):
        handle.removeHandler(handler)
        handler.close()


class LoggerRegistry:
    """Process-wide mapping from logger name to a configured ``logging.Logger``."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self._loggers: Dict[Any, logging.Logger] = {}

    def load_configuration(
        self,
        name: Union[str, ConfigurationInput, None] = None,
        configuration: Optional[ConfigurationInput] = None,
    ) -> None:
        """Install a logger under ``name``, or as the main logger when no name is given.

        Accepts ``load_configuration(configuration)`` and
        ``load_configuration(name, configuration)``. Re-registering a name
        replaces the previous entry entirely; handles already held keep writing.
        """
        if configuration is None and name is not None and not isinstance(name, str):
            name, configuration = None, name
        if name is not None and not isinstance(name, str):
            raise ConfigurationError(f"Logger name must be a string, got {type(name).__name__}")

        parsed = parse_configuration(configuration)
        key = MAIN if name is None else name
        label = MAIN_LABEL if name is None else name

        handle = _build_logger(label, parsed.levelno, create_handler(parsed, self.settings))
        self._install(key, handle)
        log.debug(
            "Registered logger %s at level %s (%s)",
            label,
            parsed.level,
            "file" if parsed.logs_to_file else "console",
        )

    def logger(self, name: Optional[str] = None) -> logging.Logger:
        """Return the logger registered as ``name``, falling back to the main logger.

        Without a name, the calling file's base name is used. A default debug
        console logger is installed as main if nothing has been loaded.
        """
        if not name:
            name = infer_logger_name()

        main = self._ensure_main()
        if not isinstance(name, str):
            return main
        return self._loggers.get(name, main)

    def configure_from_settings(self, settings: Optional[Settings] = None) -> bool:
        """Load the main logger from ``VELOX_LOG_*`` settings; return whether one was set."""
        settings = settings or self.settings
        if not settings.log_level:
            return False
        self.load_configuration(
            {
                "level": settings.log_level,
                "log_dir": settings.log_dir,
                "filename": settings.log_filename,
            }
        )
        return True

    def names(self) -> List[str]:
        return [key for key in self._loggers if key is not MAIN]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._loggers

    def close(self) -> None:
        """Close every sink and forget all loggers."""
        for handle in self._loggers.values():
            _close_handlers(handle)
        self._loggers.clear()

    def _install(self, key: Any, handle: logging.Logger) -> None:
        previous = self._loggers.get(key)
        self._loggers[key] = handle
        if previous is not None and previous is not handle:
            log.debug("Replaced logger %s", handle.name)
            _release_handlers(previous)

    def _ensure_main(self) -> logging.Logger:
        main = self._loggers.get(MAIN)
        if main is None:
            main = _build_logger(DEFAULT_LABEL, logging.DEBUG, console_handler())
            self._loggers[MAIN] = main
            main.warning(NO_CONFIGURATION_WARNING)
        return main


default_registry = LoggerRegistry()


def load_configuration(
    name: Union[str, ConfigurationInput, None] = None,
    configuration: Optional[ConfigurationInput] = None,
) -> None:
    """Load a configuration into the process default registry."""
    default_registry.load_configuration(name, configuration)


def logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger from the process default registry."""
    return default_registry.logger(name)
