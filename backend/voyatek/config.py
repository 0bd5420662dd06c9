"""
Environment driven settings for the Voyatek client.

Values are read once on import after loading a local .env file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://voyatek-tst.free.beeceptor.com/api"
BUNDLED_COUNTRIES_FILE = Path(__file__).resolve().parent / "data" / "countries.json"
RESPONSE_SHAPES = ("array", "envelope", "single")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default)).strip()
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if not raw:
        return None
    return Path(raw)


def _env_shape(name: str, default: str = "array") -> str:
    raw = os.getenv(name, default).strip().lower()
    return raw if raw in RESPONSE_SHAPES else default


@dataclass
class Settings:
    api_base_url: str = field(default_factory=lambda: os.getenv("VOYATEK_API_BASE_URL", DEFAULT_BASE_URL))
    connect_timeout: float = field(default_factory=lambda: _env_float("VOYATEK_CONNECT_TIMEOUT", 30.0))
    total_timeout: float = field(default_factory=lambda: _env_float("VOYATEK_TOTAL_TIMEOUT", 60.0))
    countries_file: Path = field(default_factory=lambda: _env_path("VOYATEK_COUNTRIES_FILE") or BUNDLED_COUNTRIES_FILE)
    response_shape: str = field(default_factory=lambda: _env_shape("VOYATEK_RESPONSE_SHAPE"))
    log_level: str = field(default_factory=lambda: os.getenv("VOYATEK_LOG_LEVEL", "INFO").upper())
    server_host: str = field(default_factory=lambda: os.getenv("VOYATEK_HOST", "0.0.0.0"))
    server_port: int = field(default_factory=lambda: int(_env_float("VOYATEK_PORT", 8000)))


settings = Settings()
