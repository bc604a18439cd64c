"""Derived ranking metrics computed from rating tables and match history."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from kob.common import PlayerName, PlayerRating, SessionResult

CONSISTENCY_POINT_SCALE = 21.0


@dataclass(frozen=True)
class EnhancedRanking(PlayerRating):
    point_differential: int = 0
    win_rate: float = 0.0
    avg_points_per_game: float = 0.0
    avg_point_diff_per_game: float = 0.0
    consistency: float = 0.0


@dataclass(frozen=True)
class RankedPlayer:
    """Win/point-ratio summary for one roster player."""

    name: PlayerName
    points: int
    wins: int
    total_points_played: int
    point_ratio: float
    rating: float
    matches_played: int


@dataclass(frozen=True)
class HeadToHeadRecord:
    opponent: PlayerName
    wins: int = 0
    losses: int = 0
    matches_played: int = 0
    points_for: int = 0
    points_against: int = 0

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against


def enhance_rankings(table: Iterable[PlayerRating]) -> list[EnhancedRanking]:
    """Add win rate, per-game averages and consistency to each rating record.

    This is a single-pass transform: feeding its own output back in raises
    ``TypeError``.
    """
    enhanced: list[EnhancedRanking] = []
    for record in table:
        if isinstance(record, EnhancedRanking):
            raise TypeError(f"{record.name!r} is already an EnhancedRanking")

        matches_played = record.matches_played
        point_differential = record.points_won - record.points_conceded
        if matches_played > 0:
            win_rate = record.wins / matches_played
            avg_points_per_game = record.points_won / matches_played
            avg_point_diff_per_game = point_differential / matches_played
        else:
            win_rate = avg_points_per_game = avg_point_diff_per_game = 0.0

        if win_rate > 0:
            raw = 1.0 - abs(0.5 - avg_point_diff_per_game / CONSISTENCY_POINT_SCALE) * 2.0
            consistency = min(1.0, max(0.0, raw))
        else:
            consistency = 0.0

        enhanced.append(
            EnhancedRanking(
                name=record.name,
                rating=record.rating,
                wins=record.wins,
                losses=record.losses,
                points_won=record.points_won,
                points_conceded=record.points_conceded,
                matches_played=matches_played,
                point_differential=point_differential,
                win_rate=win_rate,
                avg_points_per_game=avg_points_per_game,
                avg_point_diff_per_game=avg_point_diff_per_game,
                consistency=consistency,
            )
        )
    return enhanced


def rank_players(
    roster: Sequence[PlayerName],
    sessions: Iterable[SessionResult],
    ratings: Mapping[PlayerName, float] | None = None,
    *,
    initial_rating: float = 1000.0,
    min_matches: int = 8,
) -> list[RankedPlayer]:
    """Rank roster players by rating, then wins, then share of points won.

    Points and wins are tallied over every recorded court; a court only
    counts towards ``matches_played`` once either team has scored.
    """
    ratings = ratings or {}
    points: dict[PlayerName, int] = {name: 0 for name in roster}
    wins: dict[PlayerName, int] = {name: 0 for name in roster}
    played_points: dict[PlayerName, int] = {name: 0 for name in roster}
    matches: dict[PlayerName, int] = {name: 0 for name in roster}

    for session in sessions:
        for match in session.matches:
            total = match.team1_points + match.team2_points
            sides = (
                (match.team1, match.team1_points, match.team2_points),
                (match.team2, match.team2_points, match.team1_points),
            )
            for team, own_points, opposing_points in sides:
                for player in team:
                    if player not in points:
                        continue
                    points[player] += own_points
                    played_points[player] += total
                    if own_points > opposing_points:
                        wins[player] += 1
                    if match.is_played:
                        matches[player] += 1

    ranked = [
        RankedPlayer(
            name=name,
            points=points[name],
            wins=wins[name],
            total_points_played=played_points[name],
            point_ratio=points[name] / played_points[name] if played_points[name] > 0 else 0.0,
            rating=ratings.get(name, initial_rating),
            matches_played=matches[name],
        )
        for name in roster
    ]
    ranked = [player for player in ranked if player.matches_played >= min_matches]
    return sorted(ranked, key=lambda player: (-player.rating, -player.wins, -player.point_ratio))


def head_to_head_records(
    player: PlayerName,
    sessions: Iterable[SessionResult],
) -> list[HeadToHeadRecord]:
    """Return the player's record against every opponent faced in a played match."""
    records: dict[PlayerName, HeadToHeadRecord] = {}

    for session in sessions:
        for match in session.matches:
            if not match.is_played:
                continue
            if player in match.team1:
                own_points, opposing_points, opponents = (
                    match.team1_points,
                    match.team2_points,
                    match.team2,
                )
            elif player in match.team2:
                own_points, opposing_points, opponents = (
                    match.team2_points,
                    match.team1_points,
                    match.team1,
                )
            else:
                continue

            for opponent in opponents:
                record = records.get(opponent, HeadToHeadRecord(opponent=opponent))
                records[opponent] = HeadToHeadRecord(
                    opponent=opponent,
                    wins=record.wins + (1 if own_points > opposing_points else 0),
                    losses=record.losses + (1 if own_points < opposing_points else 0),
                    matches_played=record.matches_played + 1,
                    points_for=record.points_for + own_points,
                    points_against=record.points_against + opposing_points,
                )

    return sorted(records.values(), key=lambda record: record.matches_played, reverse=True)


__all__ = [
    "EnhancedRanking",
    "HeadToHeadRecord",
    "RankedPlayer",
    "enhance_rankings",
    "head_to_head_records",
    "rank_players",
]
