"""Runtime settings for the process-wide data layer registry."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, field_validator

from datalayer.domain.registry import DEFAULT_NAME

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class DataLayerSettings(BaseModel):
    default_name: str = DEFAULT_NAME
    log_level: str = "WARNING"

    @field_validator("default_name")
    @classmethod
    def _non_empty_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("default_name must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DataLayerSettings:
        """Build settings from ``DATALAYER_NAME`` and ``DATALAYER_LOG_LEVEL``."""
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        if "DATALAYER_NAME" in env:
            values["default_name"] = env["DATALAYER_NAME"]
        if "DATALAYER_LOG_LEVEL" in env:
            values["log_level"] = env["DATALAYER_LOG_LEVEL"]
        return cls(**values)


def configure_logging(settings: DataLayerSettings) -> logging.Logger:
    """Apply the configured level to the ``datalayer`` package logger."""
    package_logger = logging.getLogger("datalayer")
    package_logger.setLevel(settings.log_level)
    return package_logger
