"""Shared utilities and infrastructure."""

from __future__ import annotations

from magnetlink.utils.exceptions import (
    ConfigurationError,
    MagnetLinkError,
    MalformedInputError,
    MalformedMagnetLinkError,
    MalformedNumRangeError,
    MalformedUrnError,
    WrongMagnetLinkTypeError,
)
from magnetlink.utils.logging_config import get_logger, setup_logging

__all__ = [
    "ConfigurationError",
    "MagnetLinkError",
    "MalformedInputError",
    "MalformedMagnetLinkError",
    "MalformedNumRangeError",
    "MalformedUrnError",
    "WrongMagnetLinkTypeError",
    "get_logger",
    "setup_logging",
]
