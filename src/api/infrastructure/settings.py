"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreBackend(StrEnum):
    """Available record store implementations."""

    MEMORY = "memory"
    SQL = "sql"


class AuthMode(StrEnum):
    """How the identity of a caller is established."""

    OIDC = "oidc"
    HEADER = "header"


class RecordStoreSettings(BaseSettings):
    """Record store connection settings.

    Environment variables:
        SOCIAL_STORE_BACKEND: memory or sql (default: memory)
        SOCIAL_STORE_DRIVER: SQLAlchemy async driver (default: postgresql+asyncpg)
        SOCIAL_STORE_HOST: Database host (default: localhost)
        SOCIAL_STORE_PORT: Database port (default: 5432)
        SOCIAL_STORE_DATABASE: Database name (default: social)
        SOCIAL_STORE_USERNAME: Database user (default: social)
        SOCIAL_STORE_PASSWORD: Database password (required in production)
        SOCIAL_STORE_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        SOCIAL_STORE_TIMEOUT_SECONDS: Per-call timeout (default: 10)
        SOCIAL_STORE_FANOUT_CONCURRENCY: Parallel reads per fan-out (default: 8)
        SOCIAL_STORE_CREATE_SCHEMA: Create the records table at startup (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: StoreBackend = Field(
        default=StoreBackend.MEMORY, description="Record store backend"
    )
    driver: str = Field(
        default="postgresql+asyncpg", description="SQLAlchemy async driver"
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="social", description="Database name")
    username: str = Field(default="social", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every store call",
        gt=0,
        le=120,
    )
    fanout_concurrency: int = Field(
        default=8,
        description="Maximum concurrent store reads per fan-out",
        ge=1,
        le=64,
    )
    create_schema: bool = Field(
        default=False,
        description="Create the records table at startup instead of via Alembic",
    )

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return (
            f"{self.driver}://{self.username}@{self.host}:{self.port}/{self.database}"
        )


class FeedSettings(BaseSettings):
    """Limits for list-returning operations.

    Environment variables:
        SOCIAL_FEED_DEFAULT_LIMIT: Feed entries when no limit is given (default: 20)
        SOCIAL_FEED_MAX_LIMIT: Upper bound for any requested limit (default: 50)
        SOCIAL_FEED_SEARCH_LIMIT: Default profile search results (default: 20)
        SOCIAL_FEED_SUGGESTION_LIMIT: Default suggested profiles (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_FEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_limit: int = Field(default=20, ge=1, le=500)
    max_limit: int = Field(default=50, ge=1, le=500)
    search_limit: int = Field(default=20, ge=1, le=500)
    suggestion_limit: int = Field(default=10, ge=1, le=500)

    @model_validator(mode="after")
    def validate_limits(self) -> "FeedSettings":
        """Validate max_limit >= default_limit."""
        if self.max_limit < self.default_limit:
            raise ValueError(
                f"max_limit ({self.max_limit}) must be >= "
                f"default_limit ({self.default_limit})"
            )
        return self


class OIDCSettings(BaseSettings):
    """OIDC identity provider settings.

    Environment variables:
        SOCIAL_OIDC_ISSUER_URL: Issuer URL of the identity provider
        SOCIAL_OIDC_AUDIENCE: Expected audience claim
        SOCIAL_OIDC_USER_ID_CLAIM: Claim holding the stable subject (default: sub)
        SOCIAL_OIDC_USERNAME_CLAIM: Claim holding a username hint
            (default: preferred_username)
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_OIDC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    issuer_url: str = Field(
        default="http://localhost:8080/realms/social",
        description="OIDC issuer URL",
    )
    audience: str = Field(default="social-api", description="Expected audience")
    user_id_claim: str = Field(default="sub")
    username_claim: str = Field(default="preferred_username")


class AuthSettings(BaseSettings):
    """Authentication mode settings.

    Environment variables:
        SOCIAL_AUTH_MODE: oidc or header (default: oidc). The header mode
            trusts an X-Subject-Id header and is meant for local development.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mode: AuthMode = Field(default=AuthMode.OIDC)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Workout Social API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def store(self) -> RecordStoreSettings:
        """Get record store settings."""
        return get_record_store_settings()

    @property
    def feed(self) -> FeedSettings:
        """Get feed settings."""
        return get_feed_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_record_store_settings() -> RecordStoreSettings:
    """Get cached record store settings."""
    return RecordStoreSettings()


@lru_cache
def get_feed_settings() -> FeedSettings:
    """Get cached feed settings."""
    return FeedSettings()


@lru_cache
def get_oidc_settings() -> OIDCSettings:
    """Get cached OIDC settings."""
    return OIDCSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings."""
    return AuthSettings()
