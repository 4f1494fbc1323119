"""Shared fixtures: a fixed clock and a clean credential environment."""

from datetime import datetime, timezone

import pytest


@pytest.fixture(autouse=True)
def _no_credentials(monkeypatch):
    """Every test starts in demo configuration unless it sets keys itself."""
    for var in ("CFBD_API_KEY", "ODDS_API_KEY", "ODDS_BOOKMAKERS", "CFBD_SEASON_TYPE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def now():
    # Saturday, Oct 17 2026, noon ET (EDT)
    return datetime(2026, 10, 17, 16, 0, tzinfo=timezone.utc)
