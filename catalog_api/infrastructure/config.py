"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Storage
    store_backend: str = "memory"  # "memory" or "database"
    database_url: str = "postgresql+asyncpg://catalog:catalog_dev_password@db:5432/catalog"
    seed_catalog: bool = False

    # Authentication
    jwt_secret: str = "dev-jwt-secret-change-in-production-0123456789"
    jwt_issuer: str = "product-catalog"
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60

    # Seeded users
    admin_username: str = "admin"
    admin_password: str = "admin123"
    viewer_username: str = "user"
    viewer_password: str = "user123"

    # Listing
    default_page_size: int = 50

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
