"""
Service Configuration
Settings read from environment variables (and a local .env file)
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    """DATABASE_URL wins; otherwise build one from the DB_* variables"""
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return (
        f"postgresql://{os.getenv('DB_USER', 'postgres')}:{os.getenv('DB_PASSWORD', '')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}"
        f"/{os.getenv('DB_NAME', 'frequency_tracker')}"
    )


@dataclass(frozen=True)
class Settings:
    database_url: str
    default_timezone: str = "America/New_York"
    # Off-time periods always shape analytics; recommendations opt in here
    apply_off_time_to_recommendations: bool = False
    cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    log_format: str = "console"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        return cls(
            database_url=_database_url(),
            default_timezone=os.getenv("DEFAULT_TIMEZONE", "America/New_York"),
            apply_off_time_to_recommendations=_env_bool("APPLY_OFF_TIME_TO_RECOMMENDATIONS"),
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "console").lower(),
            port=int(os.getenv("PORT", 8000)),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
