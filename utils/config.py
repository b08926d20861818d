"""
Centralized configuration management with strict validation
"""

from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import logging

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("static", "redis", "rest", "github")


class Config(BaseSettings):
    """Application configuration with validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    # Content backend selection
    content_backend: str = Field("static", description="static, redis, rest or github")
    static_content_path: str = Field("content/site-content.json")
    static_content_read_only: bool = Field(False)

    # Subscription store (Redis)
    redis_url: str = Field("redis://localhost:6379")
    content_redis_key: str = Field("site:content")
    content_redis_channel: str = Field("site:content:updates")

    # REST content API
    content_api_base_url: Optional[str] = Field(None)

    # GitHub hosted file
    github_token: Optional[str] = Field(
        None, validation_alias=AliasChoices("GITHUB_TOKEN", "VITE_GITHUB_TOKEN")
    )
    github_repo: Optional[str] = Field(
        None, validation_alias=AliasChoices("GITHUB_REPO", "VITE_GITHUB_REPO")
    )
    github_branch: str = Field(
        "main", validation_alias=AliasChoices("GITHUB_BRANCH", "VITE_GITHUB_BRANCH")
    )
    github_api_url: str = Field("https://api.github.com")
    content_file_path: str = Field("content/site-content.json")
    git_commit_author_name: str = Field("JaipurTV Bot")
    git_commit_author_email: str = Field("bot@jaipurtv.in")

    # Server-side content API (GET/POST /api/content)
    content_api_enabled: bool = Field(False)
    admin_users_path: str = Field("config/admin-users.json")

    # Outbound mail relay
    smtp_host: Optional[str] = Field(None)
    smtp_port: int = Field(465)
    smtp_user: Optional[str] = Field(None)
    smtp_pass: Optional[str] = Field(None)
    contact_to_email: Optional[str] = Field(None)

    # Application
    environment: str = Field("development")
    log_level: str = Field("INFO")
    port: int = Field(8000)
    sentry_dsn: Optional[str] = Field(None)
    http_timeout_seconds: float = Field(10.0)

    @field_validator("content_backend")
    @classmethod
    def validate_content_backend(cls, v):
        v = v.strip().lower()
        if v not in SUPPORTED_BACKENDS:
            raise ValueError(f"CONTENT_BACKEND must be one of: {', '.join(SUPPORTED_BACKENDS)}")
        return v

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v):
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("REDIS_URL must be a valid Redis connection string")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError("ENVIRONMENT must be one of: development, staging, production, test")
        return v

    @property
    def github_owner_and_repo(self) -> Optional[tuple]:
        """Split GITHUB_REPO into (owner, repo), or None when malformed"""
        if not self.github_repo:
            return None
        owner, _, name = self.github_repo.partition("/")
        if not owner or not name or "/" in name:
            return None
        return owner, name


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance"""
    try:
        return Config()
    except Exception as e:
        raise RuntimeError(f"Configuration validation failed: {str(e)}")
