import os
from typing import List, Optional

# Basic settings helper to read environment configuration.

GEOCACHE_DEFAULT_URL = "https://api.geocache.dev/v1/geocode"


def _as_float(val: str | None, default: Optional[float] = None) -> Optional[float]:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _as_list(val: str | None, default: List[str]) -> List[str]:
    if val is None:
        return default
    items = [item.strip() for item in val.split(",") if item.strip()]
    return items or default


class Settings:
    def __init__(self) -> None:
        self.GEOCACHE_API_KEY: Optional[str] = os.getenv("GEOCACHE_API_KEY") or None
        self.GEOCACHE_API_URL: str = os.getenv("GEOCACHE_API_URL") or GEOCACHE_DEFAULT_URL
        # None leaves requests without a timeout
        self.GEOCACHE_TIMEOUT_SECONDS: Optional[float] = _as_float(os.getenv("GEOCACHE_TIMEOUT_SECONDS"))
        self.CORS_ALLOW_ORIGINS: List[str] = _as_list(os.getenv("CORS_ALLOW_ORIGINS"), ["*"])


settings = Settings()
