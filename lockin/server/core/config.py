"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class PostgreSQLConfig(BaseModel):
    """PostgreSQL database configuration."""

    db: str = Field(default="lockin", alias="POSTGRES_DB", description="PostgreSQL database name")
    user: str = Field(default="lockin", alias="POSTGRES_USER", description="PostgreSQL database user")
    password: str = Field(default="changeme", alias="POSTGRES_PASSWORD", description="PostgreSQL database password")
    host: str = Field(default="postgres", alias="POSTGRES_HOST", description="PostgreSQL database host address")
    port: int = Field(default=5432, alias="POSTGRES_PORT", description="PostgreSQL database port number")

    model_config = {"populate_by_name": True}

    @property
    def url(self) -> str:
        """Async connection URL assembled from the individual fields."""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


class AuthConfig(BaseModel):
    """Identity token verification configuration."""

    mode: str = Field(
        default="firebase",
        alias="LOCKIN_AUTH_MODE",
        description="Token verifier to use (firebase or shared_secret)",
    )
    firebase_project_id: Optional[str] = Field(
        default=None, alias="FIREBASE_PROJECT_ID", description="Firebase project id (token audience)"
    )
    shared_secret: Optional[str] = Field(
        default=None,
        alias="LOCKIN_AUTH_SHARED_SECRET",
        description="HS256 secret for the shared_secret verifier (development only)",
    )
    shared_secret_issuer: str = Field(
        default="lockin-dev",
        alias="LOCKIN_AUTH_SHARED_SECRET_ISSUER",
        description="Expected issuer for shared_secret tokens",
    )

    model_config = {"populate_by_name": True}


class ObjectStorageConfig(BaseModel):
    """S3-compatible object storage (Cloudflare R2) configuration."""

    endpoint: Optional[str] = Field(default=None, alias="R2_ENDPOINT", description="R2 S3 API endpoint URL")
    access_key_id: Optional[str] = Field(default=None, alias="R2_ACCESS_KEY_ID", description="R2 access key id")
    secret_access_key: Optional[str] = Field(
        default=None, alias="R2_SECRET_ACCESS_KEY", description="R2 secret access key"
    )
    bucket: str = Field(default="lockin-videos", alias="R2_BUCKET", description="Bucket holding videos and thumbnails")
    url_expiry_seconds: int = Field(
        default=3600, alias="R2_URL_EXPIRY_SECONDS", description="Lifetime of presigned URLs in seconds"
    )

    model_config = {"populate_by_name": True}


class SchedulerConfig(BaseModel):
    """Background job configuration."""

    reset_timezone: str = Field(
        default="UTC",
        alias="LOCKIN_RESET_TIMEZONE",
        description="Timezone whose day/week boundaries drive recurring to-do resets",
    )
    reset_minute: int = Field(
        default=0, alias="LOCKIN_RESET_MINUTE", description="Minute of every hour the reset job fires"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Lock In server host address to bind to",
        alias="LOCKIN_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Lock In server port number",
        alias="LOCKIN_SERVER_PORT",
    )
    public_base_url: str = Field(
        default="https://lockin.app",
        description="Public base URL used when building invite links",
        alias="LOCKIN_PUBLIC_BASE_URL",
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="LOCKIN_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log format (simple, detailed, json)",
        alias="LOCKIN_LOG_FORMAT",
    )
    log_file_dir: str = Field(default="logs", description="Directory for log files", alias="LOCKIN_LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False, description="Also write logs to a file", alias="LOCKIN_ENABLE_FILE_LOGGING"
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./lockin.db",
        description="Async connection URL for application database",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Redis Configuration
    # =====================================================================
    redis_url: str = Field(
        default="redis://redis:6379/0",
        description="Redis connection URL used as the scheduler broker",
        alias="REDIS_URL",
    )

    # =====================================================================
    # Grouped Configuration Fields
    # =====================================================================
    postgres_db: str = Field(default="lockin", alias="POSTGRES_DB")
    postgres_user: str = Field(default="lockin", alias="POSTGRES_USER")
    postgres_password: str = Field(default="changeme", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="postgres", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    auth_mode: str = Field(default="firebase", alias="LOCKIN_AUTH_MODE")
    firebase_project_id: Optional[str] = Field(default=None, alias="FIREBASE_PROJECT_ID")
    auth_shared_secret: Optional[str] = Field(default=None, alias="LOCKIN_AUTH_SHARED_SECRET")
    auth_shared_secret_issuer: str = Field(default="lockin-dev", alias="LOCKIN_AUTH_SHARED_SECRET_ISSUER")

    r2_endpoint: Optional[str] = Field(default=None, alias="R2_ENDPOINT")
    r2_access_key_id: Optional[str] = Field(default=None, alias="R2_ACCESS_KEY_ID")
    r2_secret_access_key: Optional[str] = Field(default=None, alias="R2_SECRET_ACCESS_KEY")
    r2_bucket: str = Field(default="lockin-videos", alias="R2_BUCKET")
    r2_url_expiry_seconds: int = Field(default=3600, alias="R2_URL_EXPIRY_SECONDS")

    reset_timezone: str = Field(default="UTC", alias="LOCKIN_RESET_TIMEZONE")
    reset_minute: int = Field(default=0, alias="LOCKIN_RESET_MINUTE")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def postgres(self) -> PostgreSQLConfig:
        """Get PostgreSQL configuration from environment variables."""
        return PostgreSQLConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def auth(self) -> AuthConfig:
        """Get identity verification configuration from environment variables."""
        return AuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def object_storage(self) -> ObjectStorageConfig:
        """Get object storage configuration from environment variables."""
        return ObjectStorageConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def scheduler(self) -> SchedulerConfig:
        """Get scheduler configuration from environment variables."""
        return SchedulerConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
