"""Tests for derived ranking metrics."""

from __future__ import annotations

import pytest

from kob.common import MatchResult, PlayerRating, SessionResult
from kob.ratings.rankings import (
    EnhancedRanking,
    enhance_rankings,
    head_to_head_records,
    rank_players,
)


def _history() -> list[SessionResult]:
    return [
        SessionResult(
            session_id="2025-04-18",
            matches=(
                MatchResult(team1=("a", "b"), team2=("c", "d"), team1_points=21, team2_points=10),
                MatchResult(team1=("a", "c"), team2=("b", "d"), team1_points=15, team2_points=21),
                MatchResult(team1=("a", "d"), team2=("b", "c")),
            ),
        )
    ]


def test_enhance_rankings_derives_per_game_metrics() -> None:
    record = PlayerRating(
        name="a",
        rating=1040.0,
        wins=6,
        losses=2,
        points_won=168,
        points_conceded=120,
        matches_played=8,
    )

    (enhanced,) = enhance_rankings([record])

    assert enhanced.name == "a"
    assert enhanced.rating == pytest.approx(1040.0)
    assert enhanced.point_differential == 48
    assert enhanced.win_rate == pytest.approx(0.75)
    assert enhanced.avg_points_per_game == pytest.approx(21.0)
    assert enhanced.avg_point_diff_per_game == pytest.approx(6.0)
    assert enhanced.consistency == pytest.approx(1 - abs(0.5 - 6 / 21) * 2)


def test_consistency_is_zero_without_wins() -> None:
    record = PlayerRating(name="a", rating=980.0, losses=8, points_won=80, points_conceded=168, matches_played=8)

    (enhanced,) = enhance_rankings([record])

    assert enhanced.win_rate == 0.0
    assert enhanced.consistency == 0.0
    assert enhanced.point_differential == -88


def test_consistency_is_clamped_to_zero() -> None:
    record = PlayerRating(name="a", rating=1100.0, wins=1, points_won=21, points_conceded=0, matches_played=1)

    (enhanced,) = enhance_rankings([record])

    assert enhanced.consistency == 0.0


def test_players_without_matches_get_zero_metrics() -> None:
    (enhanced,) = enhance_rankings([PlayerRating(name="a", rating=1000.0)])

    assert enhanced.win_rate == 0.0
    assert enhanced.avg_points_per_game == 0.0
    assert enhanced.avg_point_diff_per_game == 0.0
    assert enhanced.consistency == 0.0


def test_enhance_rankings_keeps_order_and_does_not_filter() -> None:
    table = [PlayerRating(name=name, rating=1000.0 - index) for index, name in enumerate("cab")]
    assert [ranking.name for ranking in enhance_rankings(table)] == ["c", "a", "b"]


def test_enhance_rankings_is_single_pass() -> None:
    enhanced = enhance_rankings([PlayerRating(name="a", rating=1000.0)])
    assert isinstance(enhanced[0], EnhancedRanking)

    with pytest.raises(TypeError, match="already an EnhancedRanking"):
        enhance_rankings(enhanced)


def test_rank_players_orders_by_rating_then_wins() -> None:
    ratings = {"a": 1050.0, "b": 1050.0, "c": 990.0}

    ranked = rank_players(["a", "b", "c", "d"], _history(), ratings, min_matches=1)

    assert [player.name for player in ranked] == ["b", "a", "d", "c"]
    top = ranked[0]
    assert (top.points, top.wins, top.total_points_played, top.matches_played) == (42, 2, 67, 2)
    assert top.point_ratio == pytest.approx(42 / 67)
    assert ranked[2].rating == pytest.approx(1000.0)


def test_rank_players_filters_by_played_matches() -> None:
    assert rank_players(["a", "b", "c", "d"], _history(), min_matches=3) == []


def test_head_to_head_records_cover_played_matches_only() -> None:
    records = head_to_head_records("a", _history())

    assert [record.opponent for record in records] == ["d", "c", "b"]
    versus_d = records[0]
    assert (versus_d.wins, versus_d.losses, versus_d.matches_played) == (1, 1, 2)
    assert (versus_d.points_for, versus_d.points_against) == (36, 31)
    assert versus_d.point_differential == 5


def test_head_to_head_for_absent_player_is_empty() -> None:
    assert head_to_head_records("z", _history()) == []
