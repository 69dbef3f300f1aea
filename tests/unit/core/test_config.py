"""
Unit Tests for Settings
"""
import pytest
from pydantic import ValidationError

from nexus.core.config import Settings, settings


class TestSettings:
    """Test environment-driven settings"""

    def test_testing_environment_loaded(self):
        """Test the test suite runs under the testing environment"""
        assert settings.ENVIRONMENT == "testing"
        assert settings.is_production() is False

    def test_defaults(self, monkeypatch):
        """Test supervision defaults"""
        monkeypatch.delenv("DEFAULT_CAPACITY_LIMIT", raising=False)
        monkeypatch.delenv("MIN_ROADMAP_DAYS", raising=False)

        fresh = Settings(_env_file=None)

        assert fresh.DEFAULT_CAPACITY_LIMIT == 5
        assert fresh.MIN_ROADMAP_DAYS == 7
        assert fresh.NOTIFICATION_TTL_SECONDS == 4

    def test_env_override(self, monkeypatch):
        """Test values are read from the environment"""
        monkeypatch.setenv("DEFAULT_CAPACITY_LIMIT", "8")
        monkeypatch.setenv("STRICT_STATUS_VALIDATION", "true")
        monkeypatch.setenv("API_BASE_URL", "https://nexus.example.edu/api/")

        fresh = Settings(_env_file=None)

        assert fresh.DEFAULT_CAPACITY_LIMIT == 8
        assert fresh.STRICT_STATUS_VALIDATION is True
        assert fresh.api_base_url == "https://nexus.example.edu/api"

    def test_environment_normalized(self):
        """Test environment names are lowercased"""
        assert Settings(_env_file=None, ENVIRONMENT=" Production ").is_production() is True

    def test_dev_mode(self):
        """Test dev mode follows the environment or the DEBUG flag"""
        assert Settings(_env_file=None, ENVIRONMENT="development", DEBUG=False).is_dev_mode() is True
        assert Settings(_env_file=None, ENVIRONMENT="production", DEBUG=True).is_dev_mode() is True
        assert Settings(_env_file=None, ENVIRONMENT="production", DEBUG=False).is_dev_mode() is False

    @pytest.mark.parametrize("field,value", [
        ("ENVIRONMENT", "moon"),
        ("LOG_LEVEL", "LOUD"),
        ("DEFAULT_CAPACITY_LIMIT", 0),
    ])
    def test_invalid_values_rejected(self, field, value):
        """Test validators reject bad values"""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
