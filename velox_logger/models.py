"""Logger configuration model and level names."""

import logging
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

LevelName = Literal["debug", "info", "warn", "error"]

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_LEVEL_SYNONYMS = {"warning": "warn"}


class ConfigurationError(ValueError):
    """Raised when a logger configuration cannot be used."""


class LoggerConfiguration(BaseModel):
    """Level and optional file destination of one named logger."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    level: LevelName
    log_dir: Optional[str] = Field(None, alias="logDir")
    filename: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return _LEVEL_SYNONYMS.get(value, value)
        return value

    @model_validator(mode="after")
    def _require_log_dir_for_filename(self) -> "LoggerConfiguration":
        if self.filename and not self.log_dir:
            raise ValueError("You must give a logDir if you give a filename to logger configuration")
        return self

    @property
    def levelno(self) -> int:
        """Numeric ``logging`` level for this configuration."""
        return LEVELS[self.level]

    @property
    def logs_to_file(self) -> bool:
        return bool(self.filename)


def parse_configuration(
    configuration: Union[LoggerConfiguration, Mapping[str, Any], None],
) -> LoggerConfiguration:
    """Validate raw configuration input, raising ``ConfigurationError`` on failure."""
    if configuration is None:
        raise ConfigurationError("A logger configuration is required")
    if isinstance(configuration, LoggerConfiguration):
        return configuration
    if not isinstance(configuration, Mapping):
        raise ConfigurationError(
            f"Logger configuration must be a mapping, got {type(configuration).__name__}"
        )
    try:
        return LoggerConfiguration.model_validate(dict(configuration))
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
