"""
Tests for application settings
"""

import pytest
from pydantic import ValidationError

from config import Settings
from core.constants import EngineBackend


class TestSettings:
    """Test Settings loading"""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.environment == "development"
        assert settings.system.log_level == "INFO"
        assert settings.engine.backend is EngineBackend.PILLOW
        assert settings.engine.timeout_seconds == 30.0
        assert settings.api.port == 8000

    def test_from_env(self):
        settings = Settings.from_env(
            {
                "IMAGE_VERSIONS_ENVIRONMENT": "production",
                "IMAGE_VERSIONS_SYSTEM_LOG_LEVEL": "debug",
                "IMAGE_VERSIONS_ENGINE_BACKEND": "magick",
                "IMAGE_VERSIONS_ENGINE_TIMEOUT_SECONDS": "12.5",
                "IMAGE_VERSIONS_API_PORT": "9000",
                "IMAGE_VERSIONS_API_CORS_ORIGINS": "http://a, http://b",
                "UNRELATED": "ignored",
            }
        )
        assert settings.environment == "production"
        assert settings.system.log_level == "DEBUG"
        assert settings.engine.backend is EngineBackend.MAGICK
        assert settings.engine.timeout_seconds == 12.5
        assert settings.api.port == 9000
        assert settings.api.cors_origins == ["http://a", "http://b"]

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"IMAGE_VERSIONS_SYSTEM_LOG_LEVEL": "LOUD"})

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"IMAGE_VERSIONS_ENGINE_BACKEND": "gimp"})

    def test_to_dict(self):
        data = Settings.from_env({}).to_dict()
        assert data["engine"]["backend"] == "pillow"
        assert data["system"]["debug"] is False
