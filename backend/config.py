"""Application settings: every environment-driven knob in one place.

:class:`Settings` is a frozen dataclass.  :meth:`Settings.from_env` reads the
process environment (after ``load_dotenv()``) and returns a pre-populated
instance; tests build one directly or override a field with
:func:`dataclasses.replace`::

    from backend.config import get_settings

    settings = get_settings()
    geocoder = ReverseGeocoder(settings.geocode_url, settings.geocode_timeout_s)

The calculation core never reads settings: fee amounts and prices are always
passed in explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv

load_dotenv()

#: Free reverse-geocoding endpoint (no API key) used for the location fee mode.
DEFAULT_GEOCODE_URL: Final[str] = (
    "https://api.bigdatacloud.net/data/reverse-geocode-client"
)

DEFAULT_CORS_ORIGINS: Final[str] = "http://localhost:3000,http://localhost:8501"


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration.

    Attributes:
        app_name: Title reported by the API.
        log_level: Root logging level name (``INFO``, ``DEBUG``...).
        cors_origins: Origins allowed to call the API from a browser.
            The Streamlit dashboard runs on 8501 by default.
        geocode_url: Reverse-geocoding endpoint for coordinates → state.
        geocode_timeout_s: HTTP timeout for the geocoder, in seconds.
        api_url: Base URL the dashboard uses to reach the API.
    """

    app_name: str = "Hedge Calculator"
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_csv(DEFAULT_CORS_ORIGINS)
    )
    geocode_url: str = DEFAULT_GEOCODE_URL
    geocode_timeout_s: float = 10.0
    api_url: str = "http://localhost:8000"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_name=os.getenv("APP_NAME", "Hedge Calculator"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
            geocode_url=os.getenv("GEOCODE_URL", DEFAULT_GEOCODE_URL),
            geocode_timeout_s=float(os.getenv("GEOCODE_TIMEOUT_S", "10")),
            api_url=os.getenv("API_URL", "http://localhost:8000"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()
