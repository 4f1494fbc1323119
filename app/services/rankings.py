# app/services/rankings.py
from __future__ import annotations

import math
import re
from typing import Any, Dict, List

from app.models.scoring import round_half_up
from app.services.cfbd import first_present

AP_POLL = re.compile(r"AP", re.IGNORECASE)

TEAM_KEYS = ("team", "school", "name")
RANK_KEYS = ("rank", "current", "value")
TALENT_KEYS = ("talent", "talentComposite", "composite")

NEUTRAL_TALENT = 70


def _num(v: Any) -> float:
    """Lenient float: finite numbers and numeric strings; anything else (NaN, inf) is 0."""
    if isinstance(v, bool):
        return 0.0
    try:
        x = float(v)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return x if math.isfinite(x) else 0.0


def build_rank_map(weeks: Any) -> Dict[str, int]:
    """
    team (lowercase) -> AP rank. Weeks are walked in order and later entries
    overwrite earlier ones, so the most recent poll week wins.
    """
    ranks: Dict[str, int] = {}
    if not isinstance(weeks, list):
        return ranks

    for wk in weeks:
        polls = (wk or {}).get("polls") if isinstance(wk, dict) else None
        for poll in polls or []:
            if not isinstance(poll, dict):
                continue
            if not AP_POLL.search(str(poll.get("poll") or "")):
                continue
            for entry in poll.get("ranks") or []:
                name = str(first_present(entry, TEAM_KEYS, "")).lower()
                rank = _num(first_present(entry, RANK_KEYS))
                if not name or rank <= 0:
                    continue
                ranks[name] = int(rank)
    return ranks


def build_talent_map(rows: Any) -> Dict[str, int]:
    """
    team (lowercase) -> talent rescaled to 0..100 (min raw -> 0, max raw -> 100).
    A flat field (all values equal) gets the neutral 70 everywhere.
    """
    talents: Dict[str, int] = {}
    if not isinstance(rows, list) or not rows:
        return talents

    parsed: List[tuple] = [
        (str(first_present(t, ("team", "school"), "")).lower(), _num(first_present(t, TALENT_KEYS)))
        for t in rows
    ]
    values = [raw for _, raw in parsed]
    lo, hi = min(values), max(values)

    for name, raw in parsed:
        if not name:
            continue
        if hi == lo:
            talents[name] = NEUTRAL_TALENT
        else:
            # halving is exact and keeps hi - lo finite for extreme inputs
            talents[name] = round_half_up((raw / 2 - lo / 2) / (hi / 2 - lo / 2) * 100)
    return talents
