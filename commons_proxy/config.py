"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_BLACKLIST = [
    "porn",
    "nsfw",
    "nude",
    "sex",
    "erotic",
    "explicit",
    "scantily",
    "topless",
    "bdsm",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3000, description="Listening port")
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Comma-separated CORS origins; empty allows any origin",
    )

    # Rate limiting
    rate_limit_max: int = Field(default=30, ge=1, description="Requests per window per client")
    rate_limit_window_seconds: int = Field(default=60, ge=1, description="Window length")

    # Wikimedia Commons API
    commons_api_url: str = Field(
        default="https://commons.wikimedia.org/w/api.php", description="MediaWiki API endpoint"
    )
    commons_wiki_url: str = Field(
        default="https://commons.wikimedia.org/wiki/", description="Base URL for wiki pages"
    )
    upstream_timeout: float = Field(default=15.0, gt=0, description="HTTP request timeout in seconds")
    user_agent: str = Field(
        default="CommonsProxy/1.0 (image search proxy)",
        description="User-Agent sent to the upstream API",
    )
    thumbnail_size: int = Field(default=640, ge=1, description="Requested thumbnail width")

    # Safe search
    safe_search_blacklist: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_BLACKLIST),
        description="Comma-separated terms rejected in Strict mode",
    )

    # Application Configuration
    app_title: str = Field(default="Commons Image Search", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")

    @field_validator("allowed_origins", "safe_search_blacklist", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @property
    def rate_limit(self) -> str:
        """Limit string in the notation understood by slowapi."""
        return f"{self.rate_limit_max}/{self.rate_limit_window_seconds} seconds"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
