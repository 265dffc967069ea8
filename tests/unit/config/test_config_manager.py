"""Tests for configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

pytestmark = [pytest.mark.unit, pytest.mark.config]

from magnetlink.config.config import (
    CONFIG_FILENAME,
    ConfigManager,
    get_config,
    init_config,
    reset_config,
)
from magnetlink.models import LogLevel, ParseOptions
from magnetlink.utils.exceptions import ConfigurationError


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults(self):
        manager = ConfigManager()
        assert manager.config_file is None
        assert manager.config.parse == ParseOptions(strict=False)
        assert manager.config.observability.log_level is LogLevel.WARNING
        assert manager.config.observability.log_file is None

    def test_finds_file_in_cwd(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[parse]\nstrict = true\n")
        manager = ConfigManager()
        assert manager.config_file == tmp_path / CONFIG_FILENAME
        assert manager.config.parse.strict is True

    def test_explicit_file(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[observability]\nlog_level = "DEBUG"\n')
        manager = ConfigManager(config_file)
        assert manager.config.observability.log_level is LogLevel.DEBUG

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigManager(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[parse\nstrict = ")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            ConfigManager(config_file)

    def test_invalid_value(self, tmp_path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text('[observability]\nlog_level = "LOUD"\n')
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigManager(config_file)

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("true", True), ("off", False)])
    def test_env_strict(self, monkeypatch, value, expected):
        monkeypatch.setenv("MAGNETLINK_STRICT", value)
        assert ConfigManager().config.parse.strict is expected

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / CONFIG_FILENAME).write_text(
            "[parse]\nstrict = true\n[observability]\nlog_level = \"ERROR\"\n"
        )
        monkeypatch.setenv("MAGNETLINK_STRICT", "false")
        manager = ConfigManager()
        assert manager.config.parse.strict is False
        assert manager.config.observability.log_level is LogLevel.ERROR

    def test_env_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("MAGNETLINK_LOG_LEVEL", "debug")
        assert ConfigManager().config.observability.log_level is LogLevel.DEBUG

    def test_env_log_file(self, tmp_path, monkeypatch):
        log_file = str(tmp_path / "logs" / "magnetlink.log")
        monkeypatch.setenv("MAGNETLINK_LOG_FILE", log_file)
        monkeypatch.setenv("MAGNETLINK_STRUCTURED_LOGGING", "yes")
        observability = ConfigManager().config.observability
        assert observability.log_file == log_file
        assert observability.structured_logging is True

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("MAGNETLINK_STRICT", "maybe")
        with pytest.raises(ConfigurationError):
            ConfigManager()


class TestGlobalConfig:
    """Test the process-wide configuration helpers."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_init_config_replaces_global(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[parse]\nstrict = true\n")
        get_config()
        manager = init_config(config_file)
        assert get_config() is manager.config
        assert get_config().parse.strict is True

    def test_reset_config(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("MAGNETLINK_STRICT", "1")
        reset_config()
        assert get_config() is not first
        assert get_config().parse.strict is True


class TestParseOptions:
    """Test the ParseOptions model."""

    def test_frozen(self):
        options = ParseOptions()
        with pytest.raises(ValidationError):
            options.strict = True  # type: ignore[misc]
