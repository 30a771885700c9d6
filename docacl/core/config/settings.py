"""Application settings.

All defaults are defined here - no external system owns defaults.
Uses Pydantic Settings for automatic env var (and .env) loading.
"""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docacl.core.config.enums import Environment


class Settings(BaseSettings):
    """Settings for the access control filter service.

    Loaded once per process. Env vars use the field name as-is, e.g.
    ``AUTHORITY_SERVICE_BASE_URL=http://authority:8345/mcf-authority-service``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # Runtime
    # =========================================================================
    ENVIRONMENT: Environment = Field(
        Environment.LOCAL, description="Deployment environment (controls log format)"
    )
    LOG_LEVEL: str = Field("INFO", description="Log level for the docacl logger")

    # =========================================================================
    # Authority service
    # =========================================================================
    AUTHORITY_SERVICE_BASE_URL: Optional[str] = Field(
        "http://localhost:8345/mcf-authority-service",
        description="Base URL of the authority service that resolves user access tokens",
    )
    AUTHORITY_CONNECTION_TIMEOUT_MS: int = Field(
        60000, gt=0, description="Connect timeout toward the authority service"
    )
    AUTHORITY_SOCKET_TIMEOUT_MS: int = Field(
        300000, gt=0, description="Read/write/pool timeout toward the authority service"
    )
    AUTHORITY_CONNECTION_POOL_SIZE: int = Field(
        50, ge=1, description="Max pooled connections (total and per destination)"
    )

    # =========================================================================
    # Index ACL fields
    # =========================================================================
    ALLOW_ATTRIBUTE_PREFIX: str = Field(
        "allow_token_", description="Prefix of the allow_<relation> index fields"
    )
    DENY_ATTRIBUTE_PREFIX: str = Field(
        "deny_token_", description="Prefix of the deny_<relation> index fields"
    )
    NOSECURITY_TOKEN: str = Field(
        "__nosecurity__",
        min_length=1,
        description="Reserved token indexed into ACL fields that carry no restriction",
    )

    @field_validator("AUTHORITY_SERVICE_BASE_URL", mode="before")
    @classmethod
    def blank_url_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty base URL as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level name."""
        return v.upper()

    @model_validator(mode="after")
    def validate_acl_fields(self) -> "Settings":
        """Reject prefixes that would make allow and deny fields collide."""
        if self.ALLOW_ATTRIBUTE_PREFIX == self.DENY_ATTRIBUTE_PREFIX:
            raise ValueError(
                "ALLOW_ATTRIBUTE_PREFIX and DENY_ATTRIBUTE_PREFIX must differ, "
                f"both are '{self.ALLOW_ATTRIBUTE_PREFIX}'"
            )
        return self

    @property
    def authority_connect_timeout(self) -> float:
        """Connect timeout in seconds."""
        return self.AUTHORITY_CONNECTION_TIMEOUT_MS / 1000.0

    @property
    def authority_socket_timeout(self) -> float:
        """Socket timeout in seconds."""
        return self.AUTHORITY_SOCKET_TIMEOUT_MS / 1000.0
