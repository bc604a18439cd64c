"""Split four court players into two balanced teams."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from kob.common import PlayerName, TeamPlayers
from kob.scheduling.frequency import PairingFrequencyTracker
from kob.scheduling.weights import DEFAULT_SCHEDULE_WEIGHTS, ScheduleWeights

# Rank positions (strongest first) forming each candidate split.
TEAM_SPLITS: tuple[tuple[tuple[int, int], tuple[int, int]], ...] = (
    ((0, 3), (1, 2)),
    ((0, 2), (1, 3)),
    ((0, 1), (2, 3)),
)


def order_by_rating(
    players: Sequence[PlayerName],
    ratings: Mapping[PlayerName, float],
    default_rating: float,
) -> list[PlayerName]:
    """Strongest first; equal ratings fall back to name order."""
    return sorted(players, key=lambda name: (-ratings.get(name, default_rating), name))


def split_score(
    team1: TeamPlayers,
    team2: TeamPlayers,
    ratings: Mapping[PlayerName, float],
    tracker: PairingFrequencyTracker,
    *,
    default_rating: float = 1000.0,
    weights: ScheduleWeights = DEFAULT_SCHEDULE_WEIGHTS,
) -> float:
    """Cost of playing ``team1`` against ``team2``; lower is better.

    Any session opponent repeat costs at least ten times a fresh pairing,
    which outweighs any realistic rating imbalance.
    """
    team1_rating = sum(ratings.get(name, default_rating) for name in team1)
    team2_rating = sum(ratings.get(name, default_rating) for name in team2)

    teammate_history = tracker.teammate_count(*team1) + tracker.teammate_count(*team2)
    session_teammates = tracker.session_teammate_count(*team1) + tracker.session_teammate_count(*team2)
    session_opponents = sum(
        10 ** (tracker.session_opponent_count(player, opponent) + 1)
        for player in team1
        for opponent in team2
    )

    return (
        weights.balance_rating * abs(team1_rating - team2_rating)
        + weights.balance_teammate * teammate_history
        + weights.balance_session_teammate * session_teammates
        + weights.balance_session_opponent * session_opponents
    )


def balance_teams(
    players: Sequence[PlayerName],
    ratings: Mapping[PlayerName, float],
    tracker: PairingFrequencyTracker,
    *,
    default_rating: float = 1000.0,
    weights: ScheduleWeights = DEFAULT_SCHEDULE_WEIGHTS,
) -> tuple[TeamPlayers, TeamPlayers]:
    """Pick the lowest-cost of the three rank-position splits.

    Ties keep the earliest split in :data:`TEAM_SPLITS`.
    """
    if len(players) != 4 or len(set(players)) != 4:
        raise ValueError(f"balance_teams needs 4 distinct players, got {list(players)}")

    ranked = order_by_rating(players, ratings, default_rating)

    candidates = [
        ((ranked[a1], ranked[a2]), (ranked[b1], ranked[b2]))
        for (a1, a2), (b1, b2) in TEAM_SPLITS
    ]
    return min(
        candidates,
        key=lambda teams: split_score(
            teams[0],
            teams[1],
            ratings,
            tracker,
            default_rating=default_rating,
            weights=weights,
        ),
    )


__all__ = ["TEAM_SPLITS", "balance_teams", "order_by_rating", "split_score"]
