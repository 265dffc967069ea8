"""Pydantic models for magnetlink.

Provides validated configuration models for parsing and observability.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ParseOptions(BaseModel):
    """Options applied when parsing a magnet link."""

    model_config = {"frozen": True}

    strict: bool = Field(
        default=False,
        description="Reject parameters outside the magnet grammar",
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Use structured JSON logging for the log file",
    )


class Config(BaseModel):
    """Main configuration model."""

    parse: ParseOptions = Field(
        default_factory=ParseOptions,
        description="Magnet link parse options",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
