# app/core/config.py
from __future__ import annotations

import os
from typing import Optional

CFBD_DEFAULT_BASE = "https://api.collegefootballdata.com"
ODDS_DEFAULT_BASE = "https://api.the-odds-api.com/v4"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Read an env var at call time. Blank values count as unset so an empty
    `CFBD_API_KEY=` in a .env file still means demo mode.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_cfbd_api_key() -> Optional[str]:
    return _env("CFBD_API_KEY")


def get_cfbd_base_url() -> str:
    return (_env("CFBD_BASE_URL", CFBD_DEFAULT_BASE) or CFBD_DEFAULT_BASE).rstrip("/")


def get_season_type() -> str:
    return _env("CFBD_SEASON_TYPE", "regular") or "regular"


def get_odds_api_key() -> Optional[str]:
    return _env("ODDS_API_KEY")


def get_odds_regions() -> str:
    return _env("ODDS_REGIONS", "us") or "us"


def get_odds_bookmakers() -> Optional[str]:
    """Optional CSV of bookmaker keys."""
    return _env("ODDS_BOOKMAKERS")
