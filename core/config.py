"""Evidence Manager - Configuration
Environment-driven settings with sensible defaults.
"""

import os

from pydantic_settings import BaseSettings


ENVIRONMENT_VARIABLE = "EVIDENCE_MANAGER_ENV"


def get_environment() -> str:
    """Current deployment environment (development, test or production)."""
    return os.getenv(ENVIRONMENT_VARIABLE, "development")


def is_development() -> bool:
    return get_environment() == "development"


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    database: str = "evidence_manager"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"

    @property
    def async_url(self) -> str:
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"

    class Config:
        env_prefix = "POSTGRES_"
        env_file = ".env"
        extra = "ignore"


class APISettings(BaseSettings):
    """FastAPI configuration."""

    title: str = "Evidence Manager API"
    version: str = "1.0.0"
    description: str = "Police department case and evidence tracking"
    host: str = "0.0.0.0"
    port: int = 8000
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Static key required outside development
    api_key: str = ""
    api_key_header: str = "X-Api-Key"

    class Config:
        env_prefix = "API_"
        env_file = ".env"
        extra = "ignore"


class StorageSettings(BaseSettings):
    """Evidence image storage configuration."""

    evidence_root: str = "./wwwroot/evidences"
    max_image_size_mb: int = 20

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024

    class Config:
        env_prefix = "STORAGE_"
        env_file = ".env"
        extra = "ignore"


# Settings instances
db_settings = DatabaseSettings()
api_settings = APISettings()
storage_settings = StorageSettings()
