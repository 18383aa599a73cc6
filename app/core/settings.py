"""Application settings with environment validation."""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from app.exceptions import ConfigurationError

load_dotenv()


class Settings:
    """Application settings with environment validation."""

    def __init__(self) -> None:
        # Device store
        self.device_store_url = os.getenv("DEVICE_STORE_URL")
        self.db_pool_size = int(os.getenv("DB_POOL_SIZE", "10"))
        self.db_max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "20"))
        self.db_pool_recycle = int(os.getenv("DB_POOL_RECYCLE", "3600"))
        self.sql_debug = self._parse_bool(os.getenv("SQL_DEBUG", "false"))

        # Push delivery
        self.firebase_cert_path = os.getenv("FIREBASE_CERT_PATH", "firebase_key.json")
        self.push_notification_title = os.getenv("PUSH_NOTIFICATION_TITLE", "Custom notification")
        self.push_max_concurrency = max(1, int(os.getenv("PUSH_MAX_CONCURRENCY", "1")))

        self.environment = os.getenv("ENV", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.cors_origins = self._parse_cors_origins(os.getenv("CORS_ORIGINS", "*"))

    def _parse_cors_origins(self, v: str) -> List[str]:
        if v == "*":
            return ["*"]
        return [origin.strip() for origin in v.split(",")]

    def _parse_bool(self, v: str) -> bool:
        return v.lower() in ("true", "1", "yes", "on")

    @property
    def is_production(self) -> bool:  # convenience flag
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:  # convenience flag
        return self.environment.lower() == "development"

    @property
    def is_test(self) -> bool:  # convenience flag
        return self.environment.lower() == "test"


@dataclass(frozen=True)
class StoreConfig:
    """Connection parameters for the device store, built once at startup."""

    url: str
    pool_size: int = 10
    max_overflow: int = 20
    pool_recycle: int = 3600
    echo: bool = False


def load_store_config(settings: "Settings", url: Optional[str] = None) -> StoreConfig:
    """Build the store configuration, failing hard when no URL is configured."""
    url = url or settings.device_store_url
    if not url or not url.strip():
        raise ConfigurationError("The DEVICE_STORE_URL environment variable is not set.")
    return StoreConfig(
        url=url.strip(),
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        echo=settings.sql_debug,
    )


settings = Settings()
