# preferensi_api/core/config.py
from functools import lru_cache

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - TOKEN_KEY (HMAC secret used to sign and verify access tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file; use the Supabase
        Postgres connection string in production)
      - TOKEN_EXPIRE_DAYS, BCRYPT_ROUNDS, CORS_ORIGINS, HOST, PORT, LOG_LEVEL
    """

    PROJECT_NAME: str = "Preferensi API"

    # Document store
    DATABASE_URL: str = "sqlite:///./preferensi.db"
    DB_ECHO: bool = False

    # Token codec
    TOKEN_KEY: str
    TOKEN_ALG: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 30

    # Credential hasher work factor
    BCRYPT_ROUNDS: int = 10

    CORS_ORIGINS: list[str] = ["*"]

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every call.
    """
    return Settings()


def get_settings_dep(request: Request) -> Settings:
    """
    FastAPI dependency returning the settings the running app was built with.
    """
    return request.app.state.settings
