"""Application configuration module.

This module contains settings for the link shortening service,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import string
from typing import Optional, Any, List, Union
from enum import Enum
import logging

from pydantic import field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up basic logger for config module
logger = logging.getLogger(__name__)


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    DATABASE = "database"
    REDIS = "redis"


class CodeStrategy(str, Enum):
    RANDOM = "random"
    HASH = "hash"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "shortlink"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short code issuing and redirection service"

    # API Configuration
    BASE_URL: str = "http://localhost:8000"  # Used for building fully qualified short URLs
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short code generation
    CODE_LENGTH: int = 6
    CODE_ALPHABET: str = string.ascii_letters + string.digits  # base-62
    CODE_STRATEGY: CodeStrategy = CodeStrategy.RANDOM
    CODE_MAX_ATTEMPTS: int = 10  # Store attempts before giving up on a submission

    # URL validation
    DEFAULT_SCHEME: str = "https"  # Prepended when the submitted URL has no scheme
    ALLOWED_SCHEMES: Union[List[str], str] = ["http", "https"]
    MAX_URL_LENGTH: int = 2048

    # Redirects
    REDIRECT_STATUS_CODE: int = 308

    # Link store backend
    STORE_BACKEND: StoreBackend = StoreBackend.DATABASE

    # PostgreSQL settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "shortlink"
    DATABASE_URL: Optional[str] = None  # Overrides the POSTGRES_* settings when set

    # PostgreSQL pool settings
    POSTGRES_POOL_SIZE: int = 20
    POSTGRES_POOL_MAX_OVERFLOW: int = 10
    POSTGRES_POOL_TIMEOUT: int = 30
    POSTGRES_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Redis settings
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "shortlink:link:"

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_FILE_ENABLED: bool = True
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("CORS_ORIGINS", "ALLOWED_SCHEMES", mode="before")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("ALLOWED_SCHEMES")
    def lowercase_schemes(cls, v: List[str]) -> List[str]:
        return [scheme.lower() for scheme in v]

    @field_validator("CODE_LENGTH", "CODE_MAX_ATTEMPTS", "MAX_URL_LENGTH")
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("CODE_ALPHABET")
    def validate_alphabet(cls, v: str) -> str:
        if len(set(v)) < 2:
            raise ValueError("code alphabet needs at least two distinct characters")
        return v

    @field_validator("REDIRECT_STATUS_CODE")
    def validate_redirect_status(cls, v: int) -> int:
        if v not in (301, 302, 303, 307, 308):
            raise ValueError(f"{v} is not a redirect status code")
        return v

    @field_validator("DATABASE_URL", mode="before")
    def empty_database_url(cls, v: Any) -> Optional[str]:
        """Treat an empty DATABASE_URL as unset."""
        if v == "":
            return None
        return v

    # Computed fields
    @computed_field
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the SQLAlchemy database URI from settings or use override."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @computed_field
    def REDIS_URI(self) -> str:
        """Construct the Redis URI from settings."""
        password_part = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{password_part}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# Default settings instance, used when the application factory is not given one
settings = Settings()
