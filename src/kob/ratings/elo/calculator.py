"""Player-level Elo logic for 2v2 league matches."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from math import exp, floor

from kob.common import MatchResult, PlayerName, PlayerRating, SessionResult
from kob.logging import get_logger, log_timing

logger = get_logger(__name__)


@dataclass(frozen=True)
class EloParameters:
    initial_rating: float = 1000.0
    k_factor: float = 32.0
    k_factor_min: float = 16.0
    k_factor_decay: float = 0.1
    point_diff_weight: float = 0.01
    scale_factor: float = 400.0
    min_ranked_matches: int = 8


DEFAULT_ELO_PARAMETERS = EloParameters()


@dataclass(frozen=True)
class PlayerEloEvent:
    player: PlayerName
    opponent: PlayerName
    actual_score: float
    expected_score: float
    pre_rating: float
    rating_delta: int
    post_rating: float
    k_factor: float


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float = 400.0,
) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def calculate_k_factor(matches_played: int, params: EloParameters = DEFAULT_ELO_PARAMETERS) -> float:
    """K decays with experience but never drops below ``k_factor_min``."""
    return max(params.k_factor_min, params.k_factor * exp(-params.k_factor_decay * matches_played))


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def calculate_rating_deltas(
    rating_a: float,
    rating_b: float,
    matches_a: int,
    matches_b: int,
    score_a: int,
    score_b: int,
    params: EloParameters = DEFAULT_ELO_PARAMETERS,
) -> tuple[int, int]:
    """Return the whole-point rating changes for A and B after one pairing.

    The point-differential term rewards the winner (and penalizes the loser)
    in proportion to the margin relative to the total points played.
    """
    expected_a = calculate_expected_score(rating_a, rating_b, params.scale_factor)
    expected_b = calculate_expected_score(rating_b, rating_a, params.scale_factor)

    if score_a > score_b:
        actual_a = 1.0
    elif score_a < score_b:
        actual_a = 0.0
    else:
        actual_a = 0.5
    actual_b = 1.0 - actual_a

    total_points = score_a + score_b
    signed_diff = (score_a - score_b) / total_points if total_points > 0 else 0.0
    point_diff_factor = params.point_diff_weight * abs(signed_diff)

    k_a = calculate_k_factor(matches_a, params)
    k_b = calculate_k_factor(matches_b, params)

    delta_a = _round_half_up(k_a * ((actual_a - expected_a) + point_diff_factor * signed_diff))
    delta_b = _round_half_up(k_b * ((actual_b - expected_b) - point_diff_factor * signed_diff))
    return delta_a, delta_b


class PlayerEloCalculator:
    """Stateful match-by-match player Elo calculator.

    Each 2v2 match is replayed as four cross-team pairings. A pairing's
    rating change is applied before the next pairing is evaluated, so later
    pairings of the same match see already-updated ratings. Aggregate stats
    are updated once per player after all four pairings.
    """

    def __init__(self, params: EloParameters = DEFAULT_ELO_PARAMETERS) -> None:
        self.params = params
        self._records: dict[PlayerName, PlayerRating] = {}

    def register_players(self, roster: Iterable[PlayerName]) -> None:
        for name in roster:
            if name not in self._records:
                self._records[name] = PlayerRating(name=name, rating=self.params.initial_rating)

    def get_rating(self, name: PlayerName) -> float:
        record = self._records.get(name)
        return self.params.initial_rating if record is None else record.rating

    def tracked_player_count(self) -> int:
        return len(self._records)

    def ratings(self) -> dict[PlayerName, float]:
        """Return a snapshot of current ratings."""
        return {name: record.rating for name, record in self._records.items()}

    def records(self) -> list[PlayerRating]:
        """Return every tracked record, ranked or not, in registration order."""
        return list(self._records.values())

    def _apply_pairing(
        self,
        player: PlayerName,
        opponent: PlayerName,
        match: MatchResult,
    ) -> tuple[PlayerEloEvent, PlayerEloEvent]:
        player_record = self._records[player]
        opponent_record = self._records[opponent]

        player_delta, opponent_delta = calculate_rating_deltas(
            player_record.rating,
            opponent_record.rating,
            player_record.matches_played,
            opponent_record.matches_played,
            match.team1_points,
            match.team2_points,
            self.params,
        )
        expected = calculate_expected_score(
            player_record.rating, opponent_record.rating, self.params.scale_factor
        )
        if match.team1_points > match.team2_points:
            actual = 1.0
        elif match.team1_points < match.team2_points:
            actual = 0.0
        else:
            actual = 0.5

        self._records[player] = replace(player_record, rating=player_record.rating + player_delta)
        self._records[opponent] = replace(
            opponent_record, rating=opponent_record.rating + opponent_delta
        )

        player_event = PlayerEloEvent(
            player=player,
            opponent=opponent,
            actual_score=actual,
            expected_score=expected,
            pre_rating=player_record.rating,
            rating_delta=player_delta,
            post_rating=player_record.rating + player_delta,
            k_factor=calculate_k_factor(player_record.matches_played, self.params),
        )
        opponent_event = PlayerEloEvent(
            player=opponent,
            opponent=player,
            actual_score=1.0 - actual,
            expected_score=1.0 - expected,
            pre_rating=opponent_record.rating,
            rating_delta=opponent_delta,
            post_rating=opponent_record.rating + opponent_delta,
            k_factor=calculate_k_factor(opponent_record.matches_played, self.params),
        )
        return player_event, opponent_event

    def _record_result(self, player: PlayerName, own_points: int, opposing_points: int) -> None:
        record = self._records[player]
        self._records[player] = replace(
            record,
            wins=record.wins + (1 if own_points > opposing_points else 0),
            losses=record.losses + (1 if own_points < opposing_points else 0),
            points_won=record.points_won + own_points,
            points_conceded=record.points_conceded + opposing_points,
            matches_played=record.matches_played + 1,
        )

    def process_match(self, match: MatchResult) -> list[PlayerEloEvent]:
        if not match.is_played:
            return []

        events: list[PlayerEloEvent] = []
        for player in match.team1:
            for opponent in match.team2:
                if player not in self._records or opponent not in self._records:
                    logger.debug("Skipping pairing %s vs %s: not on the roster", player, opponent)
                    continue
                events.extend(self._apply_pairing(player, opponent, match))

        for player in match.team1:
            if player in self._records:
                self._record_result(player, match.team1_points, match.team2_points)
        for player in match.team2:
            if player in self._records:
                self._record_result(player, match.team2_points, match.team1_points)

        return events

    def process_session(self, session: SessionResult) -> list[PlayerEloEvent]:
        events: list[PlayerEloEvent] = []
        for match in session.matches:
            events.extend(self.process_match(match))
        return events


def sort_sessions(sessions: Iterable[SessionResult]) -> list[SessionResult]:
    """Order sessions by date; undated sessions follow in their input order."""
    indexed = list(enumerate(sessions))
    dated = [(index, session) for index, session in indexed if session.played_on is not None]
    undated = [session for _, session in indexed if session.played_on is None]
    for session in undated:
        logger.warning("Session id %r is not a date; replaying it after dated sessions", session.session_id)

    dated.sort(key=lambda item: (item[1].played_on, item[0]))
    return [session for _, session in dated] + undated


def compute_ratings(
    roster: Sequence[PlayerName],
    sessions: Iterable[SessionResult],
    params: EloParameters = DEFAULT_ELO_PARAMETERS,
) -> list[PlayerRating]:
    """Replay all sessions chronologically and return the ranked rating table.

    Only players with at least ``params.min_ranked_matches`` played matches
    are returned, highest rating first.
    """
    calculator = PlayerEloCalculator(params)
    calculator.register_players(roster)

    ordered_sessions = sort_sessions(sessions)
    with log_timing(logger, f"rating replay of {len(ordered_sessions)} sessions"):
        for session in ordered_sessions:
            calculator.process_session(session)

    qualified = [
        record
        for record in calculator.records()
        if record.matches_played >= params.min_ranked_matches
    ]
    return sorted(qualified, key=lambda record: record.rating, reverse=True)


def rating_lookup(table: Iterable[PlayerRating]) -> dict[PlayerName, float]:
    """Map player names to ratings for the scheduler."""
    return {record.name: record.rating for record in table}


__all__ = [
    "DEFAULT_ELO_PARAMETERS",
    "EloParameters",
    "PlayerEloCalculator",
    "PlayerEloEvent",
    "calculate_expected_score",
    "calculate_k_factor",
    "calculate_rating_deltas",
    "compute_ratings",
    "rating_lookup",
    "sort_sessions",
]
