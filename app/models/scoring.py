# app/models/scoring.py
from __future__ import annotations

import math
from typing import Dict, Optional

# Heuristic constants. Kept exactly as the dashboard has always shipped them;
# tune here, nothing else depends on the specific values.
SPREAD_DIFF_CAP = 40.0
SPREAD_DIVISOR = 6.0
TOTAL_BASE = 46.0
TOTAL_TALENT_SCALE = 0.35
TOTAL_MIN = 40.0
TOTAL_MAX = 74.0

DEFAULT_IMPORTANCE = 50.0
DEFAULT_PROSPECT_DENSITY = 60.0
DEFAULT_TOTAL = 50.0
WATCH_SPREAD_PENALTY = 8.0
WATCH_TOTAL_SCALE = 1.2
DRAMA_SPREAD_PENALTY = 7.0


def round_half_up(x: float) -> int:
    """Round .5 toward +inf (matches the JS dashboard, unlike Python's round())."""
    return int(math.floor(x + 0.5))


def clamp(x: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, x))


def derive_lines(home_talent: float, away_talent: float) -> Dict[str, float]:
    """
    Pseudo spread/total from two 0-100 talent scores, used when no market line exists.

    spread: talent diff capped at +/-40, /6 -> at most ~7 points either way
    total:  46 + 0.35 * avg talent, kept inside 40..74
    """
    diff = clamp(home_talent - away_talent, -SPREAD_DIFF_CAP, SPREAD_DIFF_CAP)
    spread = round_half_up(diff / SPREAD_DIVISOR)
    avg = (home_talent + away_talent) / 2
    total = clamp(round_half_up(TOTAL_BASE + avg * TOTAL_TALENT_SCALE), TOTAL_MIN, TOTAL_MAX)
    return {"spread": float(spread), "total": float(total)}


def compute_scores(
    spread: Optional[float] = None,
    total: Optional[float] = None,
    importance: Optional[float] = None,
    prospect_density: Optional[float] = None,
) -> Dict[str, float]:
    """
    Bounded 0-100 category scores.

    Close games (small |spread|) and high totals are more watchable; drama only
    looks at the spread.
    """
    s = abs(spread if spread is not None else 0.0)
    t = total if total is not None else DEFAULT_TOTAL
    imp = importance if importance is not None else DEFAULT_IMPORTANCE
    pd = prospect_density if prospect_density is not None else DEFAULT_PROSPECT_DENSITY

    watchability = (100 - s * WATCH_SPREAD_PENALTY) * 0.5 + min(100.0, t * WATCH_TOTAL_SCALE) * 0.5
    drama = 100 - s * DRAMA_SPREAD_PENALTY

    return {
        "importance": clamp(imp),
        "prospectDensity": clamp(pd),
        "watchability": clamp(round_half_up(watchability)),
        "drama": clamp(round_half_up(drama)),
    }
