"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Administrative database connection settings.

    The administrative role owns the registry tables and must be allowed to
    create schemas and login roles for brand provisioning.

    Environment variables:
        BRANDHOUSE_DB_HOST: Database host (default: localhost)
        BRANDHOUSE_DB_PORT: Database port (default: 5432)
        BRANDHOUSE_DB_DATABASE: Database name (default: brandhouse)
        BRANDHOUSE_DB_USERNAME: Database user (default: brandhouse)
        BRANDHOUSE_DB_PASSWORD: Database password (required in production)
        BRANDHOUSE_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        BRANDHOUSE_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="BRANDHOUSE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="brandhouse", description="Database name")
    username: str = Field(default="brandhouse", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Token signing settings shared by Principal and Brand tokens.

    Environment variables:
        BRANDHOUSE_AUTH_JWT_SECRET: HS256 signing key (at least 32 characters)
        BRANDHOUSE_AUTH_JWT_ISSUER: Value of the iss claim (default: brandhouse)
        BRANDHOUSE_AUTH_JWT_AUDIENCE: Value of the aud claim (default: brandhouse-api)
        BRANDHOUSE_AUTH_TOKEN_LIFETIME_MINUTES: Lifetime of every token (default: 1440)
    """

    model_config = SettingsConfigDict(
        env_prefix="BRANDHOUSE_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr("brandhouse-development-signing-key-change-me"),
        description="Symmetric token signing key",
    )
    jwt_issuer: str = Field(default="brandhouse", description="Token issuer")
    jwt_audience: str = Field(default="brandhouse-api", description="Token audience")
    token_lifetime_minutes: int = Field(
        default=1440,
        description="Lifetime of Principal and Brand tokens",
        ge=1,
        le=60 * 24 * 30,
    )

    @field_validator("jwt_secret")
    @classmethod
    def validate_secret_length(cls, value: SecretStr) -> SecretStr:
        """Reject signing keys too short for HS256."""
        if len(value.get_secret_value()) < 32:
            raise ValueError("jwt_secret must be at least 32 characters")
        return value


class BrandSettings(BaseSettings):
    """Brand provisioning and routing settings.

    Environment variables:
        BRANDHOUSE_BRANDS_CREDENTIAL_KEY: Fernet key encrypting brand database passwords
        BRANDHOUSE_BRANDS_NAME_MAX_LENGTH: Maximum brand display name length (default: 100)
        BRANDHOUSE_BRANDS_BRAND_POOL_SIZE: Connections per brand engine (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="BRANDHOUSE_BRANDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    credential_key: SecretStr = Field(
        default=SecretStr(""),
        description="Fernet key (urlsafe base64, 32 bytes) for credentials at rest",
    )
    name_max_length: int = Field(
        default=100,
        description="Maximum brand display name length",
        ge=1,
        le=255,
    )
    brand_pool_size: int = Field(
        default=5,
        description="Connection pool size of each brand engine",
        ge=1,
        le=50,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Brandhouse API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get token settings."""
        return get_auth_settings()

    @property
    def brands(self) -> BrandSettings:
        """Get brand settings."""
        return get_brand_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached token settings."""
    return AuthSettings()


@lru_cache
def get_brand_settings() -> BrandSettings:
    """Get cached brand settings."""
    return BrandSettings()
