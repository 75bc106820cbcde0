# bakery/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required in production (.env):
      - DATABASE_URL (Postgres connection string)
      - JWT_SECRET (signing secret for admin access tokens)

    Optional:
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (product image storage)
      - FIRST_ADMIN_* (bootstrap admin account created on startup)
    """

    PROJECT_NAME: str = "Bakery Ordering API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./bakery.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5

    # Admin JWT
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 7 * 24 * 60

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Supabase Storage (product images)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024
    UPLOAD_TIMEOUT_SECONDS: int = 30

    # Bootstrap admin
    FIRST_ADMIN_USERNAME: str | None = None
    FIRST_ADMIN_EMAIL: str | None = None
    FIRST_ADMIN_PASSWORD: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
