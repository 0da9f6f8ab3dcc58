"""Tests for StoreSettings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from optionstore.settings import LoggingConfig, StoreSettings


class TestStoreSettings:
    """Test building settings from the environment."""

    def test_defaults(self):
        """Should use defaults when nothing is set."""
        settings = StoreSettings.from_env({})
        assert settings.config_dir == Path("config")
        assert settings.logging.level == "INFO"
        assert settings.logging.json_logs is False

    def test_from_environment(self):
        """Should read OPTIONSTORE_* variables."""
        settings = StoreSettings.from_env(
            {
                "OPTIONSTORE_CONFIG_DIR": "/etc/app",
                "OPTIONSTORE_LOG_LEVEL": "debug",
                "OPTIONSTORE_JSON_LOGS": "TRUE",
            }
        )
        assert settings.config_dir == Path("/etc/app")
        assert settings.logging.level == "DEBUG"
        assert settings.logging.json_logs is True


class TestLoggingConfig:
    """Test logging settings validation."""

    def test_invalid_level(self):
        """Should reject unknown level names."""
        with pytest.raises(ValidationError, match="Invalid log level"):
            LoggingConfig(level="loud")
