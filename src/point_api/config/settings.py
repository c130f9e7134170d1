"""Configuration settings for the Point API client.

Settings are loaded from ``POINT_API_*`` environment variables and an
optional ``.env`` file. Values passed explicitly to the client take
precedence over anything loaded here.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    The service has been deployed in variants that differ in the status
    code signalling an expired access token and in the refresh endpoint
    path, so both are configuration rather than constants.

    :param api_url: Root address of the service
    :type api_url: str
    :param auth_failure_status: Status code that triggers a token refresh
    :type auth_failure_status: int
    :param refresh_path: Endpoint used to exchange the refresh token
    :type refresh_path: str
    :param strip_leading_slash: Strip leading slashes from endpoint paths
        before joining them to ``api_url``
    :type strip_leading_slash: bool
    :param max_attempts: Transport attempts per physical request
    :type max_attempts: int
    :param backoff_base_ms: Linear backoff step in milliseconds
    :type backoff_base_ms: int
    :param backoff_jitter_ms: Exclusive upper bound of the random jitter
    :type backoff_jitter_ms: int
    :param timeout_seconds: httpx timeout applied to every request
    :type timeout_seconds: float
    :param coalesce_refresh: Share one in-flight refresh between
        concurrent calls
    :type coalesce_refresh: bool
    :param log_level: Logging level used by :func:`setup_logging`
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="POINT_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_url: str = Field(
        "https://api.dev.point.study",
        validation_alias=AliasChoices("POINT_API_URL", "api_url"),
        description="Base URL of the Point API",
    )

    # Authentication
    auth_failure_status: int = Field(
        401, description="HTTP status that signals an expired access token"
    )
    refresh_path: str = Field(
        "login", description="Endpoint that exchanges a refresh token"
    )
    strip_leading_slash: bool = Field(
        True, description="Normalize leading slashes of endpoint paths"
    )
    coalesce_refresh: bool = Field(
        False, description="Share one in-flight refresh between concurrent calls"
    )

    # Transport
    max_attempts: int = Field(4, ge=1, description="Transport attempts per request")
    backoff_base_ms: int = Field(1000, ge=0, description="Backoff step (ms)")
    backoff_jitter_ms: int = Field(1000, ge=1, description="Backoff jitter bound (ms)")
    timeout_seconds: float = Field(30.0, gt=0, description="Request timeout")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Reject URLs without an http(s) scheme."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_url must start with http:// or https://")
        return v

    @field_validator("auth_failure_status")
    @classmethod
    def validate_auth_failure_status(cls, v: int) -> int:
        """Allow only the status codes the service uses for token expiry."""
        if v not in (401, 403):
            raise ValueError("auth_failure_status must be 401 or 403")
        return v

    @field_validator("refresh_path")
    @classmethod
    def validate_refresh_path(cls, v: str) -> str:
        """Require a non-empty refresh endpoint."""
        if not v.strip("/ "):
            raise ValueError("refresh_path cannot be empty")
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use.

    :return: Cached settings instance
    :rtype: Settings
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads the environment."""
    global _settings
    _settings = None
