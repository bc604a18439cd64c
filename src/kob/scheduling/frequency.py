"""Teammate/opponent pairing counters for the round scheduler."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from kob.common import MatchResult, PlayerName, SessionResult

PairKey = tuple[PlayerName, PlayerName]


def pair_key(player: PlayerName, other: PlayerName) -> PairKey:
    """Unordered key for a pair of players."""
    return (player, other) if player <= other else (other, player)


class PairingFrequencyTracker:
    """Symmetric pairing counts at global and session scope.

    Global counts accumulate across the whole history plus everything the
    scheduler commits. Session counts only cover the current generation call
    and are cleared by :meth:`reset_session`.
    """

    def __init__(self) -> None:
        self._teammates: Counter[PairKey] = Counter()
        self._opponents: Counter[PairKey] = Counter()
        self._session_teammates: Counter[PairKey] = Counter()
        self._session_opponents: Counter[PairKey] = Counter()

    @classmethod
    def from_history(cls, sessions: Iterable[SessionResult]) -> PairingFrequencyTracker:
        tracker = cls()
        for session in sessions:
            for match in session.matches:
                tracker.record_history_match(match)
        return tracker

    def teammate_count(self, player: PlayerName, other: PlayerName) -> int:
        return self._teammates[pair_key(player, other)]

    def opponent_count(self, player: PlayerName, other: PlayerName) -> int:
        return self._opponents[pair_key(player, other)]

    def session_teammate_count(self, player: PlayerName, other: PlayerName) -> int:
        return self._session_teammates[pair_key(player, other)]

    def session_opponent_count(self, player: PlayerName, other: PlayerName) -> int:
        return self._session_opponents[pair_key(player, other)]

    def teammate_pairs(self) -> dict[PairKey, int]:
        return {key: count for key, count in self._teammates.items() if count}

    def opponent_pairs(self) -> dict[PairKey, int]:
        return {key: count for key, count in self._opponents.items() if count}

    def reset_session(self) -> None:
        self._session_teammates.clear()
        self._session_opponents.clear()

    def _pairs(
        self,
        team1: Iterable[PlayerName],
        team2: Iterable[PlayerName],
    ) -> tuple[list[PairKey], list[PairKey]]:
        team1 = tuple(team1)
        team2 = tuple(team2)
        teammate_keys = [
            pair_key(team[i], team[j])
            for team in (team1, team2)
            for i in range(len(team))
            for j in range(i + 1, len(team))
        ]
        opponent_keys = [pair_key(player, opponent) for player in team1 for opponent in team2]
        return teammate_keys, opponent_keys

    def record_history_match(self, match: MatchResult) -> None:
        """Count a historical court in the global scope only."""
        teammate_keys, opponent_keys = self._pairs(match.team1, match.team2)
        self._teammates.update(teammate_keys)
        self._opponents.update(opponent_keys)

    def record_teams(self, team1: Iterable[PlayerName], team2: Iterable[PlayerName]) -> None:
        """Commit a scheduled court to both scopes, once per unordered pair."""
        teammate_keys, opponent_keys = self._pairs(team1, team2)
        self._teammates.update(teammate_keys)
        self._opponents.update(opponent_keys)
        self._session_teammates.update(teammate_keys)
        self._session_opponents.update(opponent_keys)


__all__ = ["PairKey", "PairingFrequencyTracker", "pair_key"]
