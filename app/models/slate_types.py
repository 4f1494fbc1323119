# app/models/slate_types.py
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from typing_extensions import TypedDict


class Window(str, Enum):
    NOON = "Noon"
    AFTERNOON = "Afternoon"
    PRIME = "Prime"
    LATE = "Late"


# display order for grouped output
WINDOWS: List[Window] = [Window.NOON, Window.AFTERNOON, Window.PRIME, Window.LATE]


class SourceTag(str, Enum):
    CFBD = "CFBD"
    AP = "AP"
    ODDS = "Odds"
    COMPUTED = "Computed"


class Game(TypedDict):
    id: str
    window: Window
    kickoffET: str
    kickoffDate: Optional[str]
    kickoffISO: Optional[str]
    network: Optional[str]
    teamA: str
    teamB: str
    rankA: Optional[int]
    rankB: Optional[int]
    spread: Optional[float]
    total: Optional[float]
    importance: float
    prospectDensity: float
    watchability: float
    drama: float
    importanceSrc: Optional[SourceTag]
    prospectDensitySrc: Optional[SourceTag]
    watchabilitySrc: Optional[SourceTag]
    dramaSrc: Optional[SourceTag]
    lastUpdated: str
    why: Optional[str]


class SlateResponse(TypedDict):
    games: List[Game]
    demo: bool
    updatedAt: str


class RankedGame(Game):
    score: int


class Weights(TypedDict):
    importance: float
    prospect: float
    watchability: float
    drama: float


class WindowPick(TypedDict):
    window: Window
    primary: Optional[RankedGame]
    alternate: Optional[RankedGame]
    message: Optional[str]


class RankedSlate(TypedDict):
    games: List[RankedGame]
    plan: List[WindowPick]
    weights: Weights
    demo: bool
    updatedAt: str
