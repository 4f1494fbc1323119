# app/models/watch_score.py
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping

from app.models.scoring import round_half_up
from app.models.slate_types import WINDOWS, RankedGame, Window, WindowPick

DEFAULT_WEIGHTS: Dict[str, float] = {
    "importance": 35.0,
    "prospect": 30.0,
    "watchability": 20.0,
    "drama": 15.0,
}

EMPTY_WINDOW_MESSAGE = "No games in this window."


def _weight(v: Any) -> float:
    x = float(v or 0.0)
    return max(0.0, x) if math.isfinite(x) else 0.0


def normalize_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """
    Scale the four weights so they sum to 1. An all-zero input divides by 1
    instead of 0, so every game scores 0 rather than blowing up. Non-finite
    weights count as 0.
    """
    w = {k: _weight(weights.get(k)) for k in DEFAULT_WEIGHTS}
    # rescale by the largest weight first so huge finite inputs cannot overflow the sum
    top = max(w.values())
    if top > 0:
        w = {k: v / top for k, v in w.items()}
    total = sum(w.values()) or 1.0
    return {
        "wi": w["importance"] / total,
        "wp": w["prospect"] / total,
        "ww": w["watchability"] / total,
        "wd": w["drama"] / total,
    }


def calc_score(game: Mapping[str, Any], weights: Mapping[str, float]) -> int:
    nw = normalize_weights(weights)
    return round_half_up(
        game["importance"] * nw["wi"]
        + game["prospectDensity"] * nw["wp"]
        + game["watchability"] * nw["ww"]
        + game["drama"] * nw["wd"]
    )


def rank_games(games: Iterable[Mapping[str, Any]], weights: Mapping[str, float]) -> List[RankedGame]:
    """Copies of the games with `score` set, best first. Ties keep feed order."""
    scored = [{**g, "score": calc_score(g, weights)} for g in games]
    scored.sort(key=lambda g: g["score"], reverse=True)
    return scored  # type: ignore[return-value]


def plan_windows(ranked: Iterable[RankedGame]) -> List[WindowPick]:
    """
    Best pick + alternate per viewing window. Expects `ranked` already sorted
    (see rank_games); every window is present in the output, empty ones with a message.
    """
    by_window: Dict[Window, List[RankedGame]] = {w: [] for w in WINDOWS}
    for g in ranked:
        by_window[Window(g["window"])].append(g)

    plan: List[WindowPick] = []
    for w in WINDOWS:
        picks = by_window[w][:2]
        primary = picks[0] if picks else None
        alternate = picks[1] if len(picks) > 1 else None
        plan.append({
            "window": w,
            "primary": primary,
            "alternate": alternate,
            "message": None if primary else EMPTY_WINDOW_MESSAGE,
        })
    return plan
