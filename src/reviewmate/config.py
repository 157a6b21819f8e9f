"""Configuration settings for ReviewMate."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubConfig(BaseModel):
    """Configuration for outbound GitHub API calls."""

    api_base_url: str | None = Field(
        default=None,
        description="Override for the GitHub REST base URL (GitHub Enterprise)",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Upper bound for a single PR fetch before it counts as unavailable",
    )
    user_agent: str = Field(
        default="ReviewMate-Backend",
        description="User-Agent header sent to GitHub",
    )


class PriorityConfig(BaseModel):
    """Line-count thresholds for PR priority tiers.

    A PR whose changed-line total is exactly at a threshold takes the
    higher tier.
    """

    high_threshold: int = Field(
        default=200,
        ge=1,
        description="Lines changed at or above which a PR is High priority",
    )
    medium_threshold: int = Field(
        default=50,
        ge=1,
        description="Lines changed at or above which a PR is Medium priority",
    )

    @model_validator(mode="after")
    def check_ordering(self) -> "PriorityConfig":
        """Ensure the medium tier starts below the high tier."""
        if self.medium_threshold >= self.high_threshold:
            raise ValueError("medium_threshold must be lower than high_threshold")
        return self


class SMTPConfig(BaseModel):
    """Configuration for outbound notification email."""

    host: str | None = Field(default=None, description="SMTP server host")
    port: int | None = Field(default=None, ge=1, le=65535, description="SMTP server port")
    username: str | None = Field(default=None, description="SMTP login user")
    password: str | None = Field(default=None, description="SMTP login password")
    from_address: str | None = Field(default=None, description="Sender address")

    @property
    def is_configured(self) -> bool:
        """Email is only sent when every SMTP setting is present."""
        return all(
            (self.host, self.port, self.username, self.password, self.from_address)
        )


class ServerConfig(BaseModel):
    """Configuration for the HTTP API server."""

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=5001, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS",
    )


class EventsConfig(BaseModel):
    """Configuration for live event delivery."""

    queue_size: int = Field(
        default=1000,
        ge=1,
        description="Per-subscriber queue bound (oldest events dropped when full)",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Controls file logging, rotation, and output format.
    """

    log_file: str | None = Field(
        default=None,
        description="Optional path for file logging (enables rotation)",
    )
    rotation: str = Field(
        default="10 MB",
        description="When to rotate log file (e.g., '10 MB', '1 day')",
    )
    retention: str = Field(
        default="7 days",
        description="How long to keep rotated logs",
    )
    serialize: bool = Field(
        default=False,
        description="If True, output JSON format to file",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # Database
    # --------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite+aiosqlite:///./reviewmate.db",
        description="Async database connection string",
    )

    # --------------------------------------------------------------------------
    # Secrets
    # --------------------------------------------------------------------------
    github_token_secret: str = Field(
        default="",
        description="Secret used to derive the GitHub token encryption key",
    )
    jwt_secret: str = Field(
        default="",
        description="Secret used to sign API access tokens",
    )
    access_token_ttl_hours: int = Field(
        default=12,
        ge=1,
        description="Lifetime of issued API access tokens",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # --------------------------------------------------------------------------
    # Components
    # --------------------------------------------------------------------------
    github: GitHubConfig = Field(
        default_factory=GitHubConfig,
        description="GitHub API configuration",
    )
    priority: PriorityConfig = Field(
        default_factory=PriorityConfig,
        description="Priority tier thresholds",
    )
    smtp: SMTPConfig = Field(
        default_factory=SMTPConfig,
        description="Notification email configuration",
    )
    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP server configuration",
    )
    events: EventsConfig = Field(
        default_factory=EventsConfig,
        description="Live event delivery configuration",
    )

    # --------------------------------------------------------------------------
    # Logging Configuration
    # --------------------------------------------------------------------------
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration (file output, rotation)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
