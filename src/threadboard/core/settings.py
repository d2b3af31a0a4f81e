"""Application settings and configuration.

This module defines all configuration options for the Threadboard application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Threadboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Principal decoding; tokens are issued by the external auth service
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")

    # Database configuration
    database_url: str = Field(default="sqlite:///./threadboard.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Cache configuration
    cache_backend: str = Field(default="memory", alias="CACHE_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")
    # Seconds per feed; 0 leaves the feed uncached.
    feed_cache_ttls: dict[str, int] = Field(
        default={
            "trending": 300,
            "bookmarks": 3600,
            "following": 0,
            "for_you": 0,
        },
        alias="FEED_CACHE_TTLS",
    )

    # Ranking
    trending_window_days: int = Field(default=7, alias="TRENDING_WINDOW_DAYS")
    trending_comment_weight: float = Field(default=2.0, alias="TRENDING_COMMENT_WEIGHT")
    # For-you scores at most this many newest plus this many most engaged posts
    feed_candidate_limit: int = Field(default=1000, alias="FEED_CANDIDATE_LIMIT")

    # Vote ledger compare-and-swap attempts, the first one included
    vote_max_attempts: int = Field(default=3, alias="VOTE_MAX_ATTEMPTS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    def feed_ttl(self, feed: str) -> int:
        """Return the cache TTL in seconds for ``feed`` (0 when uncached)."""
        return max(0, int(self.feed_cache_ttls.get(feed, 0)))


settings = Settings()
