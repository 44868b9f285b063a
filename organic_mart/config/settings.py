"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = Field(default="Afrah Organic Mart API")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(
        default="Storefront and back-office API for an organic goods marketplace"
    )
    debug: bool = Field(default=False)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=True)

    # Database settings
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    database_name: str = Field(default="organic_mart")

    # MongoDB connection settings
    server_selection_timeout_ms: int = Field(default=30000, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS")
    connect_timeout_ms: int = Field(default=30000, alias="MONGODB_CONNECT_TIMEOUT_MS")
    socket_timeout_ms: int = Field(default=30000, alias="MONGODB_SOCKET_TIMEOUT_MS")
    max_pool_size: int = Field(default=10, alias="MONGODB_MAX_POOL_SIZE")
    min_pool_size: int = Field(default=1, alias="MONGODB_MIN_POOL_SIZE")
    retry_writes: bool = Field(default=True, alias="MONGODB_RETRY_WRITES")
    direct_connection: bool = Field(default=False, alias="MONGODB_DIRECT_CONNECTION")

    # Logging settings
    log_level: str = Field(default="INFO")

    # Auth settings
    jwt_secret: str = Field(default="dev-only-secret-change-me-in-production-env")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7)

    # CORS
    cors_origins: list[str] = Field(default=["*"])

    # Business logic settings
    search_min_length: int = Field(default=2)
    search_result_limit: int = Field(default=5)
    featured_product_limit: int = Field(default=4)
    recent_orders_limit: int = Field(default=5)
    rating_max_retries: int = Field(default=5)

    # Live snapshot settings
    snapshot_poll_interval_seconds: float = Field(default=2.0)
    snapshot_use_change_streams: bool = Field(default=True)


@lru_cache
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
