"""Shared types for league ratings and scheduling."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

PlayerName = str
TeamPlayers = tuple[PlayerName, PlayerName]


def validate_team(players: tuple[str, ...], *, label: str = "team") -> None:
    if len(players) != 2:
        raise ValueError(f"{label} must have exactly 2 players, got {len(players)}")
    if players[0] == players[1]:
        raise ValueError(f"{label} lists {players[0]!r} twice")


@dataclass(frozen=True)
class MatchResult:
    """One 2v2 court outcome as recorded by the league store."""

    team1: TeamPlayers
    team2: TeamPlayers
    team1_points: int = 0
    team2_points: int = 0

    def __post_init__(self) -> None:
        validate_team(self.team1, label="team1")
        validate_team(self.team2, label="team2")
        if self.team1_points < 0 or self.team2_points < 0:
            raise ValueError(
                f"points must be >= 0, got {self.team1_points}-{self.team2_points}"
            )

    @property
    def is_played(self) -> bool:
        """A 0-0 court is an unplayed placeholder."""
        return not (self.team1_points == 0 and self.team2_points == 0)

    @property
    def players(self) -> tuple[PlayerName, ...]:
        return self.team1 + self.team2


@dataclass(frozen=True)
class SessionResult:
    """All courts of one league session, in round/court order."""

    session_id: str
    matches: tuple[MatchResult, ...] = ()

    @property
    def played_on(self) -> datetime | None:
        """Session date as a naive UTC datetime, or None when the id is not a date."""
        try:
            played_on = datetime.fromisoformat(self.session_id)
        except ValueError:
            return None
        if played_on.tzinfo is not None:
            played_on = played_on.astimezone(timezone.utc).replace(tzinfo=None)
        return played_on


@dataclass(frozen=True)
class PlayerRating:
    name: PlayerName
    rating: float
    wins: int = 0
    losses: int = 0
    points_won: int = 0
    points_conceded: int = 0
    matches_played: int = 0


@dataclass(frozen=True)
class TeamSlot:
    players: TeamPlayers
    points: int = 0


@dataclass(frozen=True)
class CourtAssignment:
    """One scheduled 2v2 slot ("set") within a round."""

    set_id: str
    court: int
    teams: tuple[TeamSlot, TeamSlot]

    @property
    def players(self) -> tuple[PlayerName, ...]:
        return self.teams[0].players + self.teams[1].players

    def as_match_result(self) -> MatchResult:
        return MatchResult(
            team1=self.teams[0].players,
            team2=self.teams[1].players,
            team1_points=self.teams[0].points,
            team2_points=self.teams[1].points,
        )


@dataclass(frozen=True)
class Round:
    round_id: str
    courts: tuple[CourtAssignment, ...] = ()


__all__ = [
    "CourtAssignment",
    "MatchResult",
    "PlayerName",
    "PlayerRating",
    "Round",
    "SessionResult",
    "TeamPlayers",
    "TeamSlot",
    "validate_team",
]
