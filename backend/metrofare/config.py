"""Configuration for the metro fare service."""

from typing import List
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Settings:
    """Application settings."""

    # API Settings
    API_TITLE = "Metro Fare Service"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = (
        "Station lookup and fare calculation backed by the Taipei Metro ticket API"
    )

    # Local datastore
    STATIONS_PATH = os.getenv("STATIONS_PATH", "mrt.json")
    CACHE_PATH = os.getenv("CACHE_PATH", "cache.json")

    # Remote fare API
    FARE_API_URL = os.getenv(
        "FARE_API_URL", "https://web.metro.taipei/apis/metrostationapi/ticketinfo"
    )
    FARE_API_LANG = os.getenv("FARE_API_LANG", "tw")
    FARE_API_VERIFY_TLS = _env_flag("FARE_API_VERIFY_TLS", True)
    FARE_API_TIMEOUT = float(os.getenv("FARE_API_TIMEOUT", "10"))

    # CORS Settings
    CORS_ORIGINS = _env_list("CORS_ORIGINS", "*")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
