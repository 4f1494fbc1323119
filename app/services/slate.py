# app/services/slate.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Dict, List, Optional

from app.core.config import get_cfbd_api_key, get_odds_api_key
from app.models.scoring import compute_scores, derive_lines, round_half_up
from app.models.slate_types import Game, SlateResponse, SourceTag, Window
from app.services import cfbd, odds_api
from app.services.et_time import format_et_date, format_et_time, iso_utc, window_from_et
from app.services.rankings import NEUTRAL_TALENT, build_rank_map, build_talent_map

logger = logging.getLogger("app.slate")

LOOKAHEAD = timedelta(days=10)
MAX_GAMES = 40

# FBS conference names (lowercased, substring match)
FBS_CONFS = (
    "sec", "big ten", "big 12", "acc", "pac-12", "pac-10", "pac",
    "american athletic", "aac", "mountain west", "sun belt",
    "conference usa", "c-usa", "mid-american", "mac",
    "independent", "fbs independents", "notre dame",
)

WHY_BOTH_RANKED = "Ranked vs ranked; playoff seeding significance."
WHY_DEFAULT = "Quality matchup with solid talent composite."


# ----------------------------------------------------------------------
# DEMO SLATE
# ----------------------------------------------------------------------
def _demo_game(now_iso: str, **kw: Any) -> Game:
    game: Dict[str, Any] = {
        "kickoffDate": None,
        "kickoffISO": None,
        "importanceSrc": SourceTag.AP,
        "prospectDensitySrc": SourceTag.COMPUTED,
        "watchabilitySrc": SourceTag.ODDS,
        "dramaSrc": SourceTag.COMPUTED,
        "lastUpdated": now_iso,
    }
    game.update(kw)
    return game  # type: ignore[return-value]


def demo_slate(now: Optional[datetime] = None) -> SlateResponse:
    """Three hand-written games served whenever live data is unavailable."""
    now_iso = iso_utc(now or datetime.now(timezone.utc))
    games = [
        _demo_game(
            now_iso, id="g1", window=Window.PRIME, kickoffET="7:30 PM", network="ABC",
            teamA="Texas", teamB="Ohio State", rankA=1, rankB=3, spread=-2.0, total=59.0,
            importance=97, prospectDensity=93, watchability=88, drama=72,
            why="#1 vs #3; CFP seeding stakes.",
        ),
        _demo_game(
            now_iso, id="g2", window=Window.AFTERNOON, kickoffET="3:30 PM", network="ABC",
            teamA="LSU", teamB="Clemson", rankA=9, rankB=4, spread=3.0, total=55.0,
            importance=94, prospectDensity=95, watchability=82, drama=79,
            why="Top-10 clash with premium front-7 talent.",
        ),
        _demo_game(
            now_iso, id="g3", window=Window.NOON, kickoffET="12:00 PM", network="FOX",
            teamA="Penn State", teamB="Illinois", rankA=2, rankB=12, spread=-6.0, total=51.0,
            importance=91, prospectDensity=87, watchability=72, drama=58,
            why="B1G positioning; QB showcase.",
        ),
    ]
    return {"games": games, "demo": True, "updatedAt": now_iso}


# ----------------------------------------------------------------------
# FILTERING
# ----------------------------------------------------------------------
def is_fbs_game(row: Dict[str, Any]) -> bool:
    """FBS by division tag, by either side's conference, or Notre Dame (independent)."""
    if "fbs" in (row.get("division") or "").lower():
        return True
    confs = ((row.get("home_conference") or "").lower(), (row.get("away_conference") or "").lower())
    if any(k in c for c in confs for k in FBS_CONFS):
        return True
    teams = ((row.get("home") or "").lower(), (row.get("away") or "").lower())
    return any("notre dame" in t for t in teams)


def is_upcoming(row: Dict[str, Any], now: datetime) -> bool:
    kick = row.get("kickoff")
    return kick is not None and now < kick < now + LOOKAHEAD


# ----------------------------------------------------------------------
# SHAPING
# ----------------------------------------------------------------------
def importance_for(rank_home: Optional[int], rank_away: Optional[int]) -> int:
    if rank_home and rank_away:
        return 95
    if rank_home or rank_away:
        return 80
    return 65


def shape_game(
    row: Dict[str, Any],
    idx: int,
    now: datetime,
    rank_map: Dict[str, int],
    talent_map: Dict[str, int],
    lines: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Game:
    """One canonical CFBD row (see cfbd.adapt_cfbd_game) -> Game record."""
    home, away = row["home"], row["away"]
    rk_h = rank_map.get(home.lower())
    rk_a = rank_map.get(away.lower())
    home_talent = talent_map.get(home.lower(), NEUTRAL_TALENT)
    away_talent = talent_map.get(away.lower(), NEUTRAL_TALENT)
    prospect_density = min(100, round_half_up((home_talent + away_talent) / 2))

    market = odds_api.find_lines(lines or {}, away, home)
    real_spread = row.get("spread")
    if real_spread is None:
        real_spread = market.get("marketSpreadHome")
    real_total = row.get("total")
    if real_total is None:
        real_total = market.get("marketTotal")

    derived = derive_lines(home_talent, away_talent)
    scores = compute_scores(
        spread=real_spread if real_spread is not None else derived["spread"],
        total=real_total if real_total is not None else derived["total"],
        importance=importance_for(rk_h, rk_a),
        prospect_density=prospect_density,
    )

    kickoff = row.get("kickoff") or now
    return {
        "id": str(row.get("id") or f"{idx}-{home}-{away}"),
        "window": window_from_et(kickoff),
        "kickoffET": format_et_time(kickoff),
        "kickoffDate": format_et_date(kickoff),
        "kickoffISO": iso_utc(kickoff),
        "network": row.get("network"),
        "teamA": home,
        "teamB": away,
        "rankA": rk_h,
        "rankB": rk_a,
        "spread": real_spread,
        "total": real_total,
        "importance": scores["importance"],
        "importanceSrc": SourceTag.AP,
        "prospectDensity": scores["prospectDensity"],
        "prospectDensitySrc": SourceTag.COMPUTED,
        "watchability": scores["watchability"],
        "watchabilitySrc": SourceTag.ODDS if (real_spread is not None or real_total is not None) else SourceTag.COMPUTED,
        "drama": scores["drama"],
        "dramaSrc": SourceTag.ODDS if real_spread is not None else SourceTag.COMPUTED,
        "lastUpdated": iso_utc(now),
        "why": WHY_BOTH_RANKED if (rk_h and rk_a) else WHY_DEFAULT,
    }


# ----------------------------------------------------------------------
# ORCHESTRATION
# ----------------------------------------------------------------------
async def _soft(label: str, coro: Awaitable[Any], empty: Any) -> Any:
    """Await one upstream fetch; any failure becomes `empty` plus a warning."""
    try:
        return await coro
    except Exception as e:
        logger.warning("slate: %s fetch failed, using empty result: %r", label, e)
        return empty


async def _build_live(now: datetime) -> List[Game]:
    fetches = [
        _soft("games", cfbd.get_games(now.year), []),
        _soft("rankings", cfbd.get_rankings(now.year), []),
        _soft("talent", cfbd.get_talent(now.year), []),
    ]
    if get_odds_api_key():
        fetches.append(_soft("odds", odds_api.get_cfb_fg_lines(), {}))

    results = await asyncio.gather(*fetches)
    games_raw, ranks_raw, talent_raw = results[:3]
    lines = results[3] if len(results) > 3 else {}

    rank_map = build_rank_map(ranks_raw)
    talent_map = build_talent_map(talent_raw)
    logger.info(
        "slate: fetched games=%d ranked=%d talent=%d lines=%d",
        len(games_raw), len(rank_map), len(talent_map), len(lines),
    )

    rows = [cfbd.adapt_cfbd_game(g) for g in games_raw if isinstance(g, dict)]
    upcoming = [r for r in rows if is_upcoming(r, now) and is_fbs_game(r)]
    logger.info("slate: %d upcoming FBS games (cap %d)", len(upcoming), MAX_GAMES)

    return [
        shape_game(r, idx, now, rank_map, talent_map, lines)
        for idx, r in enumerate(upcoming[:MAX_GAMES])
    ]


async def build_slate(now: Optional[datetime] = None) -> SlateResponse:
    """
    Live slate when CFBD is configured and returns games, demo slate otherwise.
    Never raises.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if not get_cfbd_api_key():
        logger.info("slate: CFBD_API_KEY not set, serving demo slate")
        return demo_slate(now)

    try:
        games = await _build_live(now)
    except Exception:
        logger.exception("slate: build failed, serving demo slate")
        return demo_slate(now)

    if not games:
        logger.info("slate: no upcoming games, serving demo slate")
        return demo_slate(now)

    return {"games": games, "demo": False, "updatedAt": iso_utc(now)}
