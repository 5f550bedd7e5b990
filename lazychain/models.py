"""Settings and validated parameter models for lazy chains."""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidSliceBounds


PACKAGE_LOGGER = "lazychain"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class ValueShape(str, Enum):
    """Container shapes produced by Chain.value()."""
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class SliceBounds(BaseModel):
    """Begin/end offsets of a slice; negative values count from the end."""
    model_config = ConfigDict(strict=True, frozen=True)

    begin: int = Field(0, description="First offset to include")
    end: Optional[int] = Field(None, description="Offset to stop at (exclusive)")

    @property
    def needs_count(self) -> bool:
        """Negative offsets can only be resolved once the total count is known."""
        return self.begin < 0 or (self.end is not None and self.end < 0)

    @classmethod
    def parse(cls, begin: Any, end: Any = None) -> "SliceBounds":
        try:
            return cls(begin=begin, end=end)
        except ValidationError as e:
            reason = "; ".join(error["msg"] for error in e.errors())
            raise InvalidSliceBounds(begin, end, reason) from e


class ChainSettings(BaseModel):
    """Process-wide behaviour of the chain engine."""
    model_config = ConfigDict(validate_assignment=True)

    default_shape: ValueShape = Field(
        ValueShape.SEQUENCE,
        description="Shape used by value() when no shape is requested"
    )
    log_level: str = Field(
        "WARNING",
        description="Level of the lazychain package logger"
    )
    trace_cursors: bool = Field(
        False,
        description="Log every cursor creation at DEBUG level"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Accept standard logging level names in any case."""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


_settings = ChainSettings()


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply a level to the package logger and return it."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level or _settings.log_level)
    return logger


def get_settings() -> ChainSettings:
    return _settings


def configure(**overrides) -> ChainSettings:
    """Validate overrides against the current settings and make them current."""
    global _settings
    _settings = ChainSettings(**{**_settings.model_dump(), **overrides})
    setup_logging(_settings.log_level)
    return _settings


def reset_settings() -> ChainSettings:
    """Restore default settings."""
    global _settings
    _settings = ChainSettings()
    setup_logging(_settings.log_level)
    return _settings
