"""
Application settings.

Values come from environment variables prefixed ``CATALOG_`` (or a ``.env``
file), falling back to the defaults below.

    CATALOG_PORT=9000 CATALOG_LOG_LEVEL=debug uvicorn catalog_api.main:app
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="Product Catalog API", description="Title shown in the API docs")
    debug: bool = Field(default=False, description="Verbose logging and uvicorn reload")

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=8085, ge=1, le=65535, description="Server port number")

    log_level: str = Field(default="INFO", description="Root log level")

    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string",
    )

    products_file: Optional[str] = Field(
        default=None,
        description="JSON file with the seed catalog; built-in seed when unset",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse ``cors_origins``; a bare comma separated list is accepted too."""
        try:
            origins = json.loads(self.cors_origins)
        except json.JSONDecodeError:
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        if isinstance(origins, str):
            return [origins]
        return [str(o) for o in origins]

    @property
    def products_path(self) -> Optional[Path]:
        return Path(self.products_file) if self.products_file else None

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    logger.debug("Configuration loaded: %r", settings)
    return settings
