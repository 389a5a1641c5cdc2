"""Runtime configuration loaded from the environment."""

from functools import lru_cache
from typing import Literal
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST_URL = "https://app.infisical.com"


class Settings(BaseSettings):
    """Server settings.

    Infisical credentials use the same variable names as the official
    Infisical tooling so existing deployments keep working.
    """

    model_config = SettingsConfigDict(env_file=None, extra="ignore", populate_by_name=True)

    # Universal auth
    client_id: str = Field(..., validation_alias="INFISICAL_UNIVERSAL_AUTH_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="INFISICAL_UNIVERSAL_AUTH_CLIENT_SECRET")
    host_url: str = Field(default=DEFAULT_HOST_URL, validation_alias="INFISICAL_HOST_URL")

    # Remote calls
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, validation_alias="REQUEST_TIMEOUT_SECONDS"
    )
    token_refresh_margin_seconds: float = Field(
        default=60.0, ge=0, validation_alias="TOKEN_REFRESH_MARGIN_SECONDS"
    )
    token_policy: Literal["expiry", "per-call"] = Field(
        default="expiry", validation_alias="TOKEN_POLICY"
    )

    # HTTP / WebSocket transport
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3333, ge=1, le=65535, validation_alias="PORT")
    ws_port: int = Field(default=3334, ge=1, le=65535, validation_alias="WS_PORT")
    cors_allowed_origins: str = Field(default="*", validation_alias="CORS_ALLOWED_ORIGINS")
    max_json_payload_size: int = Field(
        default=10 * 1024 * 1024, gt=0, validation_alias="MAX_JSON_PAYLOAD_SIZE"
    )

    # Observability
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    sentry_dsn: str | None = Field(default=None, validation_alias="SENTRY_DSN")

    @field_validator("client_id", "client_secret")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("host_url")
    @classmethod
    def _well_formed_host(cls, value: str) -> str:
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"must be an absolute http(s) URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ALLOWED_ORIGINS into a list."""
        if self.cors_allowed_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
