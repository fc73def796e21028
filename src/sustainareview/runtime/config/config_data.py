"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class JWTConfig(BaseModel):
    """Access token issuance and validation configuration."""

    signing_secret: str | None = Field(
        default=None, description="Secret used to sign and verify access tokens"
    )
    algorithm: str = Field(default="HS256", description="Signing algorithm")
    allowed_algorithms: list[str] = Field(
        default_factory=lambda: ["HS256"],
        description="JWT algorithms allowed for token validation",
    )
    issuer: str = Field(
        default="sustainareview-api", description="Issuer (iss) of generated tokens"
    )
    audience: str = Field(
        default="sustainareview", description="Audience (aud) of generated tokens"
    )
    access_token_ttl_seconds: int = Field(
        default=3600, description="Access token lifetime in seconds"
    )
    clock_skew: int = Field(default=60, description="Clock skew tolerance in seconds")


class SecurityConfig(BaseModel):
    """Account security settings."""

    min_password_length: int = Field(default=8, description="Minimum password length")
    reset_token_ttl_seconds: int = Field(
        default=3600, description="Password reset token lifetime in seconds"
    )
    reset_password_url: str = Field(
        default="http://localhost:5173/reset-password",
        description="Frontend page that accepts ?token=<reset token>",
    )


class CatalogConfig(BaseModel):
    """Product listing configuration."""

    default_page_size: int = Field(default=20, description="Default page size")
    max_page_size: int = Field(default=100, description="Largest accepted page size")


class UploadsConfig(BaseModel):
    """Photo upload configuration."""

    directory: str = Field(default="uploads", description="Directory photos are written to")
    public_path: str = Field(default="/uploads", description="URL path photos are served from")
    allowed_content_types: list[str] = Field(
        default_factory=lambda: ["image/jpeg", "image/png", "image/gif"],
        description="Accepted photo MIME types",
    )
    max_bytes: int = Field(default=5 * 1024 * 1024, description="Maximum photo size in bytes")
    max_files_per_review: int = Field(default=5, description="Maximum photos per review")


class EmailConfig(BaseModel):
    """Outbound email provider configuration."""

    enabled: bool = Field(default=False, description="Send email through the provider")
    api_url: str | None = Field(default=None, description="Provider HTTP endpoint")
    api_key: str | None = Field(default=None, description="Provider API key")
    sender: str = Field(default="no-reply@sustainareview.com", description="From address")
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )
    sql_level: str = Field(
        default="WARNING", description="Level of SQLAlchemy statement logging"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./sustainareview.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Resolve the password from a secrets file, an env var, or the URL itself."""
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(f"Environment variable {self.password_env_var} not set")
            return password

        from sqlalchemy.engine import make_url

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            if base_url.password:
                logger.warning(
                    "Database password from secrets does not match the one in the URL. "
                    "Using the password from secrets."
                )
            base_url = base_url.set(password=resolved_password)
        # Render manually to avoid SQLAlchemy's password masking
        return base_url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="SustainaReview API", description="Application title")
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

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="Access token configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Security configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )
    uploads: UploadsConfig = Field(
        default_factory=UploadsConfig, description="Photo upload configuration"
    )
    email: EmailConfig = Field(
        default_factory=EmailConfig, description="Email configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
