# shoepos/core/config.py
import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Shoe POS Backend"
    VERSION: str = "1.0.0"

    # Base de datos (SQLite local, PostgreSQL si la URL lo indica)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./data/shoepos.db")

    # Servidor
    PORT: int = int(os.getenv("PORT", "5000"))
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Environment
    DEBUG: bool = _env_bool("DEBUG", False)
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

settings = Settings()
