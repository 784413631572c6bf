"""
Application configuration management using Pydantic Settings.
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    APP_NAME: str = "DeckGen"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "DeckGen API"
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"]
    )

    # AI Services
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    AI_TEMPERATURE: float = 0.7
    AI_MAX_TOKENS: int = 2500
    AI_MAX_RETRIES: int = Field(default=3, ge=1)
    AI_RETRY_BASE_DELAY_MS: int = Field(default=1000, ge=0)

    # Image generation
    IMAGE_GENERATION_ENABLED: bool = True
    OPENAI_IMAGE_MODEL: str = "dall-e-2"
    OPENAI_IMAGE_SIZE: str = "1024x1024"
    IMAGE_DOWNLOAD_TIMEOUT_SECONDS: int = 60

    # Content cache
    CACHE_BACKEND: str = Field(default="file", pattern="^(file|memory|redis)$")
    CACHE_DIR: Path = Path("./cache")
    REDIS_URL: Optional[RedisDsn] = None
    CACHE_KEY_PREFIX: str = "deckgen:content"

    # Storage
    IMAGES_DIR: Path = Path("./public/images")
    OUTPUT_DIR: Path = Path("./output")

    # Sentry
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def retry_base_delay_seconds(self) -> float:
        return self.AI_RETRY_BASE_DELAY_MS / 1000


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()
