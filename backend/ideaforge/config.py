"""
Configuration management using pydantic-settings.
Loads from environment variables and .env
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"

    # Database
    ideaforge_db_url: str = "postgresql://localhost/ideaforge"

    # Security
    ideaforge_encryption_key: str = ""  # Fernet key for stored provider API keys

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Default credentials used when a user has not stored their own key
    gemini_api_key: str = ""

    # Providers
    ollama_base_url: str = "http://localhost:11434"
    request_timeout: float = 60.0  # seconds, per outbound call

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
