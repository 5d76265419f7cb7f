"""
Configuration helpers for the Mini CRUD backend.

Settings is a frozen view of the environment so that routers/services do not
fetch os.environ directly. Tests clear the cache after changing variables.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[1] / "data.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    data_file: Path
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    data_file = (os.getenv("MINICRUD_DATA_FILE") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        data_file=Path(data_file) if data_file else DEFAULT_DATA_FILE,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
