"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "OPTIONS"])
    allow_headers: list[str] = Field(default=["*"])


class PlatformConfig(BaseModel):
    """External collaboration platform configuration model."""

    base_url: str = Field(
        default="https://openapi.wps.cn", description="Platform API base URL"
    )
    app_id: str = Field(default="", description="Application ID issued by the platform")
    app_secret: str = Field(
        default="", description="Application secret (appkey) issued by the platform"
    )
    authorize_path: str = Field(
        default="/oauth2/auth", description="Browser-facing OAuth2 authorize path"
    )
    token_path: str = Field(
        default="/oauthapi/v2/token", description="Authorization code exchange path"
    )
    user_info_path: str = Field(
        default="/oauthapi/v3/user", description="User profile path"
    )
    jsapi_token_path: str = Field(
        default="/kopen/woa/api/v1/auth/jsapi_token",
        description="Signed server credential path",
    )
    jsapi_ticket_path: str = Field(
        default="/kopen/woa/api/v1/auth/jsapi_ticket",
        description="Signed JSAPI ticket path",
    )
    scope: str = Field(
        default="kso.user_base.read", description="OAuth scope requested at login"
    )
    signature_scheme: str = Field(
        default="WPS-3", description="Literal prefix of the X-Auth header"
    )
    content_type: str = Field(
        default="application/json", description="Content type of signed requests"
    )
    request_timeout: float = Field(
        default=10.0, description="Per-request timeout in seconds"
    )

    @property
    def is_configured(self) -> bool:
        """Whether both application credentials are present."""
        return bool(self.app_id and self.app_secret)

    def url_for(self, path_and_query: str) -> str:
        """Join the base URL with a path that already carries its query string."""
        return f"{self.base_url.rstrip('/')}{path_and_query}"


class IdentityConfig(BaseModel):
    """Identity resolution configuration model."""

    join_key: str = Field(
        default="external_union_id",
        description="Name reported for the field used to match internal records",
    )
    teacher_role: str = Field(
        default="teacher", description="Role value that maps to a teacher user"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="", description="Log file path (empty disables file sink)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Contact store database configuration model."""

    url: str = Field(
        default="sqlite:///./contacts.db", description="Database connection URL"
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    create_tables: bool = Field(
        default=False, description="Create missing tables at startup"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    platform: PlatformConfig = Field(
        default_factory=PlatformConfig, description="Platform configuration"
    )
    identity: IdentityConfig = Field(
        default_factory=IdentityConfig, description="Identity resolution configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
