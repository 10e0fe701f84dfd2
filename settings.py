"""Runtime configuration resolved from environment variables."""

from __future__ import annotations

from dataclasses import dataclass
import os
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

# Schedules are always read in this zone, whatever the host is set to.
SCHEDULE_TIME_ZONE = ZoneInfo("Europe/Moscow")

FILE_PATH_ENV_VARIABLE = "DT_SETTINGS_FILE_PATH"
DEFAULT_FILE_PATH = "settings.json"


@dataclass
class Settings:
    """Service configuration. Every field can be overridden from the environment."""

    settings_file_path: Path = Path(DEFAULT_FILE_PATH)
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    http_timeout_seconds: int = 15

    def __post_init__(self) -> None:
        env_path = os.getenv(FILE_PATH_ENV_VARIABLE)
        env_host = os.getenv("HOST")
        env_port = os.getenv("PORT")
        env_level = os.getenv("LOG_LEVEL")
        env_log_dir = os.getenv("LOG_DIR")
        env_timeout = os.getenv("HTTP_TIMEOUT_SECONDS")
        if env_path:
            self.settings_file_path = Path(env_path)
        if env_host:
            self.host = env_host
        if env_port:
            self.port = int(env_port)
        if env_level:
            self.log_level = env_level.upper()
        if env_log_dir:
            self.log_dir = Path(env_log_dir)
        if env_timeout:
            self.http_timeout_seconds = int(env_timeout)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
