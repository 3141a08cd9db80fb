"""Turismo front-end — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Remote REST API
    API_BASE_URL: str = "http://localhost:3333"
    API_TIMEOUT_SECONDS: float = 15.0

    # Local credential storage
    CREDENTIAL_FILE: str = "./data/local_storage.json"
    CREDENTIAL_KEY: str = "auth_token"

    # Locale / display
    TIMEZONE: str = "Africa/Luanda"
    CURRENCY_SYMBOL: str = "Kz"

    # Booking form
    MAX_GUESTS: int = 10

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
