"""
Configuration for Image Versions.

Settings are grouped by concern and read from ``IMAGE_VERSIONS_*``
environment variables, e.g. ``IMAGE_VERSIONS_ENGINE_BACKEND=magick``.
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.constants import EngineBackend, EngineConstants

ENV_PREFIX = "IMAGE_VERSIONS_"


class SystemSettings(BaseModel):
    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class EngineSettings(BaseModel):
    backend: EngineBackend = EngineBackend.PILLOW
    magick_binary: Optional[str] = None
    timeout_seconds: float = Field(EngineConstants.DEFAULT_TIMEOUT_SECONDS, gt=0)


class ApiSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    cors_enabled: bool = False
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseModel):
    """Application settings"""

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        ``IMAGE_VERSIONS_ENVIRONMENT`` sets the top-level field, every other
        variable is ``IMAGE_VERSIONS_<SECTION>_<FIELD>``. List values are
        comma separated.
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        sections = {name: {} for name in ("system", "engine", "api")}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            name = key[len(ENV_PREFIX) :].lower()
            if name == "environment":
                data["environment"] = value
                continue
            section, _, field = name.partition("_")
            if section in sections and field:
                if field == "cors_origins":
                    value = [origin.strip() for origin in value.split(",") if origin.strip()]
                sections[section][field] = value

        data.update({name: values for name, values in sections.items() if values})
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()
