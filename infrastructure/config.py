import os
import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

log = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_SEARCH_DEBOUNCE_MS = 500


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS


def get_secret(key: str) -> Optional[str]:
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def _lookup(key: str) -> Optional[str]:
    return get_secret(key) or os.getenv(key)


def _as_number(raw: Optional[str], default, cast):
    if raw in (None, ""):
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        log.warning(f"⚠️ Ignoring non-numeric config value {raw!r}, using {default}")
        return default
    return value if value > 0 else default


def load_settings() -> Settings:
    """Resolve settings from Streamlit secrets first, then environment variables."""
    base_url = _lookup("API_BASE_URL") or DEFAULT_API_BASE_URL
    return Settings(
        api_base_url=base_url.rstrip("/"),
        api_timeout_seconds=_as_number(_lookup("API_TIMEOUT_SECONDS"), DEFAULT_TIMEOUT_SECONDS, float),
        search_debounce_ms=_as_number(_lookup("SEARCH_DEBOUNCE_MS"), DEFAULT_SEARCH_DEBOUNCE_MS, int),
    )
