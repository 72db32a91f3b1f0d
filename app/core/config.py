"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Resolvers
    CATALOG_BACKEND: Literal["fixtures", "cinemeta"] = "fixtures"
    RESOLVER_TIMEOUT_SECONDS: float = 10.0

    # Cinemeta (only used with CATALOG_BACKEND=cinemeta)
    CINEMETA_URL: str = "https://v3-cinemeta.strem.io"
    CINEMETA_RATE_LIMIT: int = 20  # requests per second, 0 disables

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_META: int = 3600  # 1 hour

    # Development
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
