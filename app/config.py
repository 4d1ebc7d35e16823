from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

# Project root (the directory that holds the ``app`` package)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Database: SQLite by default; point DATABASE_URL at PostgreSQL in production
    DATABASE_URL: str = f"sqlite:///{_PROJECT_ROOT / 'optica.db'}"

    # JWT
    JWT_SECRET: str = "change-this-secret-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 480  # 8 hours

    # App
    APP_NAME: str = "Óptica Console"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS: se puede sobreescribir con env var CORS_ORIGINS como JSON array
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Tablas
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 200

    # Default admin account created on startup when missing
    ADMIN_EMAIL: str = "admin@optica.local"
    ADMIN_PASSWORD: str = "Admin123!"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
