"""Tests for weight normalization, WatchScore ranking and the window planner."""

import math

import pytest

from app.models.slate_types import Window
from app.models.watch_score import (
    DEFAULT_WEIGHTS,
    EMPTY_WINDOW_MESSAGE,
    calc_score,
    normalize_weights,
    plan_windows,
    rank_games,
)
from app.services.slate import demo_slate


def _game(gid, window, importance=50, prospect=50, watch=50, drama=50):
    return {
        "id": gid,
        "window": window,
        "importance": importance,
        "prospectDensity": prospect,
        "watchability": watch,
        "drama": drama,
    }


class TestNormalizeWeights:
    @pytest.mark.parametrize("weights", [
        DEFAULT_WEIGHTS,
        {"importance": 1, "prospect": 0, "watchability": 0, "drama": 0},
        {"importance": 100, "prospect": 100, "watchability": 100, "drama": 100},
        {"importance": 0.2, "prospect": 7, "watchability": 13.5, "drama": 0},
    ])
    def test_sums_to_one(self, weights):
        assert math.isclose(sum(normalize_weights(weights).values()), 1.0)

    def test_all_zero_does_not_divide_by_zero(self):
        nw = normalize_weights({"importance": 0, "prospect": 0, "watchability": 0, "drama": 0})
        assert nw == {"wi": 0.0, "wp": 0.0, "ww": 0.0, "wd": 0.0}

    def test_missing_and_negative_weights_count_as_zero(self):
        nw = normalize_weights({"importance": 2, "drama": -5})
        assert nw["wi"] == 1.0
        assert nw["wd"] == 0.0


class TestCalcScore:
    def test_all_zero_weights_score_zero(self):
        zero = {"importance": 0, "prospect": 0, "watchability": 0, "drama": 0}
        assert calc_score(_game("x", Window.NOON, 90, 90, 90, 90), zero) == 0

    def test_default_weights_on_demo(self):
        games = demo_slate()["games"]
        assert [calc_score(g, DEFAULT_WEIGHTS) for g in games] == [90, 90, 81]


class TestRankGames:
    def test_importance_only_weights_on_demo(self):
        weights = {"importance": 100, "prospect": 0, "watchability": 0, "drama": 0}
        ranked = rank_games(demo_slate()["games"], weights)
        assert [g["id"] for g in ranked] == ["g1", "g2", "g3"]
        assert [g["score"] for g in ranked] == [97, 94, 91]

    def test_resorts_when_weights_change(self):
        games = [
            _game("a", Window.NOON, importance=90, drama=10),
            _game("b", Window.NOON, importance=10, drama=90),
        ]
        by_imp = rank_games(games, {"importance": 1, "prospect": 0, "watchability": 0, "drama": 0})
        by_drama = rank_games(games, {"importance": 0, "prospect": 0, "watchability": 0, "drama": 1})
        assert [g["id"] for g in by_imp] == ["a", "b"]
        assert [g["id"] for g in by_drama] == ["b", "a"]

    def test_does_not_mutate_input(self):
        games = [_game("a", Window.NOON)]
        rank_games(games, DEFAULT_WEIGHTS)
        assert "score" not in games[0]


class TestPlanWindows:
    def test_primary_and_alternate_per_window(self):
        games = [
            _game("p1", Window.PRIME, importance=99),
            _game("p2", Window.PRIME, importance=80),
            _game("p3", Window.PRIME, importance=70),
            _game("n1", "Noon", importance=60),
        ]
        plan = plan_windows(rank_games(games, DEFAULT_WEIGHTS))
        by = {p["window"]: p for p in plan}

        assert [p["window"] for p in plan] == [Window.NOON, Window.AFTERNOON, Window.PRIME, Window.LATE]
        assert by[Window.PRIME]["primary"]["id"] == "p1"
        assert by[Window.PRIME]["alternate"]["id"] == "p2"
        assert by[Window.NOON]["primary"]["id"] == "n1"
        assert by[Window.NOON]["alternate"] is None
        assert by[Window.NOON]["message"] is None

    def test_empty_windows_have_message(self):
        plan = plan_windows([])
        assert len(plan) == 4
        for pick in plan:
            assert pick["primary"] is None
            assert pick["alternate"] is None
            assert pick["message"] == EMPTY_WINDOW_MESSAGE


class TestNonFiniteWeights:
    def test_non_finite_weights_ignored(self):
        nw = normalize_weights({
            "importance": float("inf"), "prospect": float("nan"), "watchability": 1, "drama": 1,
        })
        assert nw == {"wi": 0.0, "wp": 0.0, "ww": 0.5, "wd": 0.5}

    def test_huge_finite_weights_still_sum_to_one(self):
        nw = normalize_weights({"importance": 1e308, "prospect": 1e308, "watchability": 0, "drama": 0})
        assert math.isclose(sum(nw.values()), 1.0)
        assert math.isclose(nw["wi"], 0.5)

    def test_score_with_huge_weights(self):
        weights = {"importance": 1e308, "prospect": 0, "watchability": 0, "drama": 0}
        assert calc_score(_game("x", Window.NOON, importance=88), weights) == 88
