# app/routers/slate_routes.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from app.models.slate_types import RankedSlate, SlateResponse
from app.models.watch_score import DEFAULT_WEIGHTS, plan_windows, rank_games
from app.services.slate import build_slate

logger = logging.getLogger("app.slate")
router = APIRouter(tags=["Slate"])


# -------------------------
# 🏈  Slate (raw scores)
# -------------------------
@router.get("/slate", response_model=SlateResponse)
async def slate():
    """
    Upcoming FBS games with the four 0-100 category scores.
    Always 200: upstream problems fall back to the demo slate (demo=true).
    """
    res = await build_slate()
    logger.info("slate: %d games demo=%s", len(res["games"]), res["demo"])
    return res


# -------------------------
# 📺  Ranked slate + planner
# -------------------------
@router.get("/slate/ranked", response_model=RankedSlate)
async def slate_ranked(
    importance: float = Query(DEFAULT_WEIGHTS["importance"], ge=0, allow_inf_nan=False, description="Importance weight"),
    prospect: float = Query(DEFAULT_WEIGHTS["prospect"], ge=0, allow_inf_nan=False, description="Prospect density weight"),
    watchability: float = Query(DEFAULT_WEIGHTS["watchability"], ge=0, allow_inf_nan=False, description="Watchability weight"),
    drama: float = Query(DEFAULT_WEIGHTS["drama"], ge=0, allow_inf_nan=False, description="Drama weight"),
):
    """
    Slate sorted by WatchScore for the given weights (auto-normalized), plus
    the best pick and an alternate for each viewing window.
    """
    weights = {
        "importance": importance,
        "prospect": prospect,
        "watchability": watchability,
        "drama": drama,
    }
    res = await build_slate()
    ranked = rank_games(res["games"], weights)
    return {
        "games": ranked,
        "plan": plan_windows(ranked),
        "weights": weights,
        "demo": res["demo"],
        "updatedAt": res["updatedAt"],
    }
