"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS Configuration
    CORS_ORIGINS: str = "*"

    # Development/Debug
    DEBUG: bool = False
    RELOAD: bool = False

    # Spell-check Configuration
    DEFAULT_SPELLCHECK_PROVIDER: str = "daum"  # Options: daum, pnu, all
    SPELLCHECK_CHUNK_MAX_CHARS: int = 900  # Max characters per chunk sent to a backend
    SPELLCHECK_TIMEOUT_SECONDS: float = 12.0  # Timeout per chunk request
    SPELLCHECK_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    )

    # Backend endpoints
    DAUM_SPELLCHECK_URL: str = "https://dic.daum.net/grammar_checker.do"
    PNU_SPELLCHECK_URL: str = "https://nara-speller.co.kr/speller/results"

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    UVICORN_LOG_LEVEL: Optional[str] = None
    HTTPX_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


# Global settings instance
settings = Settings()
