"""Tests for session round/court scheduling."""

from __future__ import annotations

import logging
from collections import Counter

import pytest

from kob.common import MatchResult, SessionResult
from kob.scheduling.frequency import PairingFrequencyTracker
from kob.scheduling.scheduler import (
    RoundScheduler,
    courts_for_roster,
    generate_schedule,
    max_pairing_frequency,
    plan_session,
)

TWELVE = [f"p{index:02d}" for index in range(1, 13)]


def _teams(rounds) -> list[list[tuple[tuple[str, str], tuple[str, str]]]]:
    return [
        [(court.teams[0].players, court.teams[1].players) for court in round_.courts]
        for round_ in rounds
    ]


def test_schedule_shape_for_full_courts() -> None:
    rounds = generate_schedule(TWELVE, 4, 3)

    assert [round_.round_id for round_ in rounds] == ["round-1", "round-2", "round-3", "round-4"]
    for round_number, round_ in enumerate(rounds, start=1):
        assert [court.court for court in round_.courts] == [1, 2, 3]
        assert [court.set_id for court in round_.courts] == [
            f"{round_number}-1",
            f"{round_number}-2",
            f"{round_number}-3",
        ]
        for court in round_.courts:
            assert len(court.teams) == 2
            assert all(len(team.players) == 2 for team in court.teams)
            assert all(team.points == 0 for team in court.teams)
            assert len(set(court.players)) == 4
        round_players = [player for court in round_.courts for player in court.players]
        assert sorted(round_players) == TWELVE


def test_every_player_fills_one_slot_per_round() -> None:
    rounds = generate_schedule(TWELVE, 4, 3)

    appearances = Counter(player for round_ in rounds for court in round_.courts for player in court.players)
    assert sum(appearances.values()) == 48
    assert set(appearances.values()) == {4}


def test_schedule_is_deterministic() -> None:
    ratings = {name: 1000.0 + 10 * index for index, name in enumerate(TWELVE)}
    assert generate_schedule(TWELVE, 4, 3, ratings) == generate_schedule(TWELVE, 4, 3, ratings)


def test_two_round_schedule_matches_greedy_selection() -> None:
    rounds = generate_schedule(TWELVE, 2, 3)

    assert _teams(rounds) == [
        [
            (("p01", "p04"), ("p02", "p03")),
            (("p05", "p08"), ("p06", "p07")),
            (("p09", "p12"), ("p10", "p11")),
        ],
        [
            (("p01", "p02"), ("p05", "p09")),
            (("p03", "p04"), ("p06", "p10")),
            (("p07", "p08"), ("p11", "p12")),
        ],
    ]


def test_two_rounds_never_repeat_a_session_teammate() -> None:
    scheduler = RoundScheduler(TWELVE, 2, 3)
    scheduler.generate()

    assert all(count == 1 for count in scheduler.tracker.teammate_pairs().values())


def test_twelve_players_four_rounds_repeat_teammates_only_on_fallback_courts() -> None:
    scheduler = RoundScheduler(TWELVE, 4, 3)
    rounds = scheduler.generate()

    assert _teams(rounds) == [
        [
            (("p01", "p04"), ("p02", "p03")),
            (("p05", "p08"), ("p06", "p07")),
            (("p09", "p12"), ("p10", "p11")),
        ],
        [
            (("p01", "p02"), ("p05", "p09")),
            (("p03", "p04"), ("p06", "p10")),
            (("p07", "p08"), ("p11", "p12")),
        ],
        [
            (("p01", "p11"), ("p03", "p06")),
            (("p02", "p05"), ("p04", "p12")),
            (("p07", "p08"), ("p09", "p10")),
        ],
        [
            (("p01", "p05"), ("p07", "p10")),
            (("p02", "p09"), ("p06", "p08")),
            (("p03", "p04"), ("p11", "p12")),
        ],
    ]
    assert scheduler.fallbacks == [(3, 3), (4, 3)]

    seen: set[tuple[str, str]] = set()
    repeats: list[tuple[tuple[str, str], tuple[int, int]]] = []
    for round_number, round_ in enumerate(rounds, start=1):
        for court in round_.courts:
            for team in court.teams:
                pair = tuple(sorted(team.players))
                if pair in seen:
                    repeats.append((pair, (round_number, court.court)))
                seen.add(pair)

    assert repeats == [
        (("p07", "p08"), (3, 3)),
        (("p03", "p04"), (4, 3)),
        (("p11", "p12"), (4, 3)),
    ]
    assert all(location in scheduler.fallbacks for _, location in repeats)


def test_two_rounds_never_fall_back() -> None:
    scheduler = RoundScheduler(TWELVE, 2, 3)
    scheduler.generate()

    assert scheduler.fallbacks == []


def test_four_players_rotate_partners_over_three_rounds() -> None:
    rounds = generate_schedule(["a", "b", "c", "d"], 3, 1)

    assert _teams(rounds) == [
        [(("a", "d"), ("b", "c"))],
        [(("a", "c"), ("b", "d"))],
        [(("a", "b"), ("c", "d"))],
    ]


def test_teams_are_balanced_by_rating() -> None:
    ratings = {"a": 1000.0, "b": 1100.0, "c": 1300.0, "d": 1400.0}

    rounds = generate_schedule(["a", "b", "c", "d"], 1, 1, ratings)

    assert _teams(rounds) == [[(("d", "a"), ("c", "b"))]]


def test_history_steers_away_from_past_teammates() -> None:
    history = [
        SessionResult(
            session_id="2025-04-11",
            matches=(MatchResult(team1=("a", "d"), team2=("b", "c"), team1_points=21, team2_points=10),),
        )
    ]

    rounds = generate_schedule(["a", "b", "c", "d"], 1, 1, history=history)

    assert _teams(rounds) == [[(("a", "c"), ("b", "d"))]]


def test_history_counts_persist_in_global_tracker() -> None:
    history = [
        SessionResult(
            session_id="2025-04-11",
            matches=(MatchResult(team1=("a", "d"), team2=("b", "c")),),
        )
    ]
    tracker = PairingFrequencyTracker.from_history(history)
    scheduler = RoundScheduler(["a", "b", "c", "d"], 1, 1, tracker=tracker)
    scheduler.generate()

    assert tracker.teammate_count("a", "d") == 1
    assert tracker.teammate_count("a", "c") == 1
    assert tracker.session_teammate_count("a", "d") == 0
    assert tracker.session_teammate_count("a", "c") == 1


def test_zero_courts_returns_empty_schedule(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="kob"):
        rounds = generate_schedule(["a", "b", "c"], 4, 0)

    assert rounds == []
    assert "Not enough players" in caplog.text


def test_short_roster_skips_courts_it_cannot_fill(caplog: pytest.LogCaptureFixture) -> None:
    scheduler = RoundScheduler(["a", "b", "c", "d", "e", "f"], 2, 2)

    with caplog.at_level(logging.WARNING, logger="kob"):
        rounds = scheduler.generate()

    assert len(rounds) == 2
    assert all(len(round_.courts) == 1 for round_ in rounds)
    assert scheduler.shortfalls == [(1, 2), (2, 2)]
    assert "court 2 of round 1" in caplog.text


def test_roster_below_one_court_yields_empty_rounds() -> None:
    scheduler = RoundScheduler(["a", "b", "c"], 2, 1)

    rounds = scheduler.generate()

    assert [round_.courts for round_ in rounds] == [(), ()]
    assert scheduler.shortfalls == [(1, 1), (2, 1)]


def test_session_counts_reset_between_calls() -> None:
    scheduler = RoundScheduler(["a", "b", "c", "d"], 1, 1)

    first = scheduler.generate()
    second = scheduler.generate()

    assert _teams(first) == [[(("a", "d"), ("b", "c"))]]
    assert _teams(second) == [[(("a", "c"), ("b", "d"))]]
    assert scheduler.tracker.session_teammate_count("a", "d") == 0
    assert scheduler.tracker.session_teammate_count("a", "c") == 1
    assert scheduler.tracker.teammate_count("a", "d") == 1


def test_duplicate_roster_names_raise_error() -> None:
    with pytest.raises(ValueError, match="duplicate players"):
        RoundScheduler(["a", "b", "a", "c"], 1, 1)


def test_negative_counts_raise_error() -> None:
    with pytest.raises(ValueError, match="round_count"):
        RoundScheduler(["a", "b", "c", "d"], -1, 1)
    with pytest.raises(ValueError, match="court_count"):
        RoundScheduler(["a", "b", "c", "d"], 1, -1)


def test_max_pairing_frequency() -> None:
    assert max_pairing_frequency(4, 3, 12) == 2
    assert max_pairing_frequency(4, 3, 13) == 2
    assert max_pairing_frequency(1, 1, 4) == 1
    assert max_pairing_frequency(0, 3, 12) == 0
    assert max_pairing_frequency(4, 1, 0) == 0


def test_plan_session_uses_every_full_court() -> None:
    assert courts_for_roster(13) == 3
    rounds = plan_session(TWELVE + ["p13"])

    assert len(rounds) == 4
    assert all(len(round_.courts) == 3 for round_ in rounds)


def test_scheduled_courts_feed_back_as_history() -> None:
    roster = ["a", "b", "c", "d"]
    (first_round,) = generate_schedule(roster, round_count=1, court_count=1)
    history = [
        SessionResult(
            session_id="2025-05-01",
            matches=tuple(court.as_match_result() for court in first_round.courts),
        )
    ]

    (next_round,) = generate_schedule(roster, round_count=1, court_count=1, history=history)

    assert _teams([first_round]) == [[(("a", "d"), ("b", "c"))]]
    assert _teams([next_round]) == [[(("a", "c"), ("b", "d"))]]
