"""Configuration loading for magnetlink."""

from __future__ import annotations

from magnetlink.config.config import (
    ConfigManager,
    get_config,
    init_config,
    reset_config,
)

__all__ = ["ConfigManager", "get_config", "init_config", "reset_config"]
