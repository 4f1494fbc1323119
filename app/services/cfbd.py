# app/services/cfbd.py

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import httpx

from app.core.config import get_cfbd_api_key, get_cfbd_base_url, get_season_type
from app.services.et_time import parse_kickoff

logger = logging.getLogger("app.cfbd")

HEADERS = {"Accept": "application/json"}

# Field-name variants seen across CFBD API versions (snake_case v1, camelCase v2)
# plus a few generic spellings. Order matters: first present value wins.
START_KEYS = ("start_date", "startDate", "start_time", "startTime", "start")
HOME_KEYS = ("home_team", "homeTeam", "home")
AWAY_KEYS = ("away_team", "awayTeam", "away")
HOME_CONF_KEYS = ("home_conference", "homeConference", "home_conf")
AWAY_CONF_KEYS = ("away_conference", "awayConference", "away_conf")
DIVISION_KEYS = ("division", "division_name", "homeClassification", "home_classification")
NETWORK_KEYS = ("tv", "network", "channel")


# -----------------------------------------------------------
# Field probing
# -----------------------------------------------------------
def first_present(obj: Any, keys: Iterable[str], default: Any = None) -> Any:
    """
    Return obj[key] for the first key holding a usable value (not None, not "").
    Non-dict input yields `default`.
    """
    if not isinstance(obj, dict):
        return default
    for k in keys:
        v = obj.get(k)
        if v is None or v == "":
            continue
        return v
    return default


def _text(obj: Any, keys: Iterable[str]) -> str:
    v = first_present(obj, keys, "")
    return str(v) if v is not None else ""


def _line(v: Any) -> Optional[float]:
    # bool is an int subclass; a stray true/false is not a line, nor is NaN/inf
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    try:
        x = float(v)
    except OverflowError:
        return None
    return x if math.isfinite(x) else None


def adapt_cfbd_game(g: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten one raw CFBD game into canonical snake_case fields.
    Everything downstream of here only reads these keys.
    """
    spread = _line(g.get("spread")) if isinstance(g, dict) else None
    total = _line(g.get("total")) if isinstance(g, dict) else None
    network = first_present(g, NETWORK_KEYS)
    return {
        "id": first_present(g, ("id",)),
        "home": _text(g, HOME_KEYS),
        "away": _text(g, AWAY_KEYS),
        "home_conference": _text(g, HOME_CONF_KEYS),
        "away_conference": _text(g, AWAY_CONF_KEYS),
        "division": _text(g, DIVISION_KEYS),
        "network": str(network) if network is not None else None,
        "kickoff": parse_kickoff(first_present(g, START_KEYS)),
        "spread": spread,
        "total": total,
    }


# -----------------------------------------------------------
# HTTP
# -----------------------------------------------------------
async def _get_json(path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """
    Single-shot authenticated GET against CFBD. No retries: the slate falls
    back to demo data instead. Raises httpx errors (incl. non-2xx) to the caller.
    """
    api_key = get_cfbd_api_key()
    if not api_key:
        raise RuntimeError("CFBD_API_KEY not configured")

    url = f"{get_cfbd_base_url()}{path}"
    headers = {**HEADERS, "Authorization": f"Bearer {api_key}"}
    async with httpx.AsyncClient(timeout=10.0, headers=headers) as client:
        r = await client.get(url, params=params)
        r.raise_for_status()
        data = r.json()

    size = len(data) if isinstance(data, list) else "n/a"
    logger.info("CFBD GET %s params=%s -> %s rows", path, params, size)
    return data


def _season_year(now: Optional[datetime] = None) -> int:
    return (now or datetime.now()).year


async def get_games(year: Optional[int] = None) -> List[Dict[str, Any]]:
    """Full-season FBS schedule; the slate filters it down to the next 10 days."""
    params = {
        "year": year or _season_year(),
        "seasonType": get_season_type(),
        "division": "fbs",
    }
    data = await _get_json("/games", params)
    return data if isinstance(data, list) else []


async def get_rankings(year: Optional[int] = None) -> List[Dict[str, Any]]:
    """Poll weeks for the season, oldest first as CFBD returns them."""
    params = {"year": year or _season_year(), "seasonType": get_season_type()}
    data = await _get_json("/rankings", params)
    return data if isinstance(data, list) else []


async def get_talent(year: Optional[int] = None) -> List[Dict[str, Any]]:
    """247 team talent composite rows."""
    data = await _get_json("/talent", {"year": year or _season_year()})
    return data if isinstance(data, list) else []
