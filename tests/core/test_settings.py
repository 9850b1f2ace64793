"""Unit tests for application settings."""

import os
from pathlib import Path
from unittest import mock

import pytest
from pydantic import ValidationError

from testdb.core.config import settings as settings_module
from testdb.core.config.settings import (
    ApplicationSettings,
    PropertySourceSettings,
    get_settings,
)


class TestApplicationSettings:
    """Test ApplicationSettings environment binding."""

    @pytest.mark.unit
    def test_log_level_from_env_is_upper_cased(self):
        """Test LOG_LEVEL is read and normalised."""
        # Act
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            settings = ApplicationSettings()

        # Assert
        assert settings.log_level == "DEBUG"

    @pytest.mark.unit
    def test_invalid_log_level(self):
        """Test an unknown LOG_LEVEL is rejected."""
        # Act / Assert
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "chatty"}):
            with pytest.raises(ValidationError, match="LOG_LEVEL"):
                ApplicationSettings()

    @pytest.mark.unit
    def test_only_log_level_is_configurable(self):
        """Test the application section carries just the log level."""
        assert set(ApplicationSettings.model_fields) == {"log_level"}


class TestPropertySourceSettings:
    """Test PropertySourceSettings environment binding."""

    @pytest.mark.unit
    def test_defaults(self):
        """Test default properties file location."""
        # Act
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = PropertySourceSettings()

        # Assert
        assert settings.properties_file == Path("application-test.yaml")
        assert settings.ignore_missing_file is True

    @pytest.mark.unit
    def test_from_env(self):
        """Test TESTDB_* variables override the defaults."""
        # Arrange
        env = {
            "TESTDB_PROPERTIES_FILE": "/tmp/test.properties",
            "TESTDB_IGNORE_MISSING_FILE": "false",
        }

        # Act
        with mock.patch.dict(os.environ, env):
            settings = PropertySourceSettings()

        # Assert
        assert settings.properties_file == Path("/tmp/test.properties")
        assert settings.ignore_missing_file is False


class TestGetSettings:
    """Test the cached settings accessor."""

    @pytest.mark.unit
    def test_get_settings_is_cached(self, monkeypatch):
        """Test get_settings returns the same instance."""
        # Arrange
        monkeypatch.setattr(settings_module, "_settings", None)

        # Act
        first = get_settings()
        second = get_settings()

        # Assert
        assert first is second
