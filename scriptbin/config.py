"""Application configuration for different environments."""
from __future__ import annotations

import os
from typing import Type


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    SCRIPT_MAX_CHARS = int(os.getenv("SCRIPT_MAX_CHARS", "100000"))
    # Byte caps on request bodies. An escaped character can take 12 bytes in
    # JSON or a url-encoded form; the rest is headroom for the other fields.
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", SCRIPT_MAX_CHARS * 12 + 256 * 1024))
    MAX_FORM_MEMORY_SIZE = MAX_CONTENT_LENGTH
    SCRIPT_ID_BYTES = int(os.getenv("SCRIPT_ID_BYTES", "6"))
    SCRIPT_ID_MAX_ATTEMPTS = int(os.getenv("SCRIPT_ID_MAX_ATTEMPTS", "16"))
    SCRIPTS_PER_PAGE = int(os.getenv("SCRIPTS_PER_PAGE", "20"))
    SCRIPTS_MAX_PER_PAGE = int(os.getenv("SCRIPTS_MAX_PER_PAGE", "100"))
    RAW_REQUIRES_OWNER = _env_bool("RAW_REQUIRES_OWNER")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    LOG_LEVEL = "DEBUG"


_CONFIG_LOOKUP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    None: DevelopmentConfig,
}


def get_config(name: str | None) -> Type[BaseConfig]:
    """Return the configuration class for a given name."""
    normalized = (name or os.getenv("FLASK_ENV", "development")).lower()
    return _CONFIG_LOOKUP.get(normalized, DevelopmentConfig)
