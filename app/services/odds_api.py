# app/services/odds_api.py
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import ODDS_DEFAULT_BASE, get_odds_api_key, get_odds_bookmakers, get_odds_regions

logger = logging.getLogger("app.odds")

HEADERS = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}
CFB_SPORT_KEY = "americanfootball_ncaaf"


def _norm(s: str) -> str:
    return "".join(ch for ch in (s or "").lower() if ch.isalnum())


def matchup_token(away: str, home: str) -> str:
    return f"{_norm(away)}|{_norm(home)}"


async def _get_json(url: str, params: Dict[str, str]) -> Any:
    async with httpx.AsyncClient(timeout=8.0, headers=HEADERS) as client:
        r = await client.get(url, params=params)
        r.raise_for_status()
        return r.json()


def _point(v: Any) -> Optional[float]:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    try:
        x = float(v)
    except OverflowError:
        return None
    return x if math.isfinite(x) else None


def _pick_market_point(market: Dict[str, Any], home_norm: str) -> Optional[float]:
    outcomes = market.get("outcomes") or []
    if not outcomes:
        return None
    key = market.get("key")
    if key == "spreads":
        # prefer HOME spread
        for o in outcomes:
            nm = _norm(o.get("name") or "")
            if nm == home_norm or nm == "home":
                return _point(o.get("point"))
        return _point(outcomes[0].get("point"))
    if key == "totals":
        return _point(outcomes[0].get("point"))
    return None


def extract_lines(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    First bookmaker quoting each market wins; stop once both spread and total are found.
    Returns {"marketSpreadHome", "marketTotal", "book"} (values may be None).
    """
    home_n = _norm(event.get("home_team") or "")
    best_s: Optional[float] = None
    best_t: Optional[float] = None
    best_book: Optional[str] = None

    for bm in event.get("bookmakers") or []:
        mkts = bm.get("markets") or []
        m_spread = next((m for m in mkts if m.get("key") == "spreads"), None)
        m_total = next((m for m in mkts if m.get("key") == "totals"), None)

        s = _pick_market_point(m_spread, home_n) if m_spread else None
        t = _pick_market_point(m_total, home_n) if m_total else None
        if (best_s is None and s is not None) or (best_t is None and t is not None):
            best_s = s if best_s is None else best_s
            best_t = t if best_t is None else best_t
            best_book = best_book or bm.get("title") or bm.get("key")
        if best_s is not None and best_t is not None:
            break

    return {"marketSpreadHome": best_s, "marketTotal": best_t, "book": best_book}


async def get_cfb_fg_lines() -> Dict[str, Dict[str, Any]]:
    """
    Full-game CFB spreads/totals keyed by matchup_token(away, home).
    Empty dict when ODDS_API_KEY is not configured. HTTP errors propagate.
    """
    api_key = get_odds_api_key()
    if not api_key:
        return {}

    params = {
        "apiKey": api_key,
        "regions": get_odds_regions(),
        "markets": "spreads,totals",
        "oddsFormat": "american",
        "dateFormat": "iso",
    }
    books = get_odds_bookmakers()
    if books:
        params["bookmakers"] = books

    data = await _get_json(f"{ODDS_DEFAULT_BASE}/sports/{CFB_SPORT_KEY}/odds", params)
    events: List[Dict[str, Any]] = data if isinstance(data, list) else []

    out: Dict[str, Dict[str, Any]] = {}
    for ev in events:
        home, away = ev.get("home_team"), ev.get("away_team")
        if not (home and away):
            continue
        out[matchup_token(away, home)] = extract_lines(ev)
    logger.info("ODDS %s lines loaded: %d", CFB_SPORT_KEY, len(out))
    return out


def find_lines(lines: Dict[str, Dict[str, Any]], away: str, home: str) -> Dict[str, Any]:
    """
    Look up a CFBD matchup in the odds map. Odds API names carry mascots
    ("Ohio State Buckeyes"), so fall back to a prefix match on both teams,
    accepted only when exactly one event matches ("Texas" also prefixes "Texas A&M").
    """
    if not lines:
        return {}
    token = matchup_token(away, home)
    if token in lines:
        return lines[token]

    a, h = _norm(away), _norm(home)
    if not (a and h):
        return {}
    matches = [
        row for key, row in lines.items()
        if key.partition("|")[0].startswith(a) and key.partition("|")[2].startswith(h)
    ]
    if len(matches) == 1:
        return matches[0]
    if matches:
        logger.info("ODDS ambiguous matchup %s @ %s: %d candidates", away, home, len(matches))
    return {}
