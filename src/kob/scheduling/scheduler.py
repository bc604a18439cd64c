"""Greedy round/court/team assignment for one league session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from math import ceil

from kob.common import CourtAssignment, PlayerName, Round, SessionResult, TeamSlot
from kob.logging import get_logger
from kob.scheduling.frequency import PairingFrequencyTracker
from kob.scheduling.teams import balance_teams
from kob.scheduling.weights import DEFAULT_SCHEDULE_WEIGHTS, ScheduleWeights

logger = get_logger(__name__)

PLAYERS_PER_COURT = 4
DEFAULT_ROUNDS_PER_SESSION = 4
DEFAULT_INITIAL_RATING = 1000.0

# Session-opponent repeats tolerated per chosen player: strict pass, relaxed pass.
ELIGIBILITY_SESSION_OPPONENT_LIMITS = (0, 1)


def courts_for_roster(player_count: int) -> int:
    return player_count // PLAYERS_PER_COURT


def max_pairing_frequency(round_count: int, court_count: int, player_count: int) -> int:
    """How often a teammate pairing may recur globally before it is avoided."""
    if player_count == 0:
        return 0
    return ceil((round_count * court_count) / (player_count / 2))


class RoundScheduler:
    """
    Fills every court of every round with four players and splits them into
    two teams.

    Court players are picked greedily: the first is the player least paired
    with the rest of the available pool, the other three minimize pairing
    history with those already on the court. Ties always resolve to the
    lexicographically smallest name, so identical inputs give identical
    schedules.

    Usage:
        scheduler = RoundScheduler(roster, round_count=4, court_count=3)
        rounds = scheduler.generate()
    """

    def __init__(
        self,
        roster: Sequence[PlayerName],
        round_count: int,
        court_count: int,
        ratings: Mapping[PlayerName, float] | None = None,
        *,
        tracker: PairingFrequencyTracker | None = None,
        weights: ScheduleWeights = DEFAULT_SCHEDULE_WEIGHTS,
        initial_rating: float = DEFAULT_INITIAL_RATING,
    ) -> None:
        if len(set(roster)) != len(roster):
            duplicates = sorted({name for name in roster if list(roster).count(name) > 1})
            raise ValueError(f"roster contains duplicate players: {duplicates}")
        if round_count < 0:
            raise ValueError(f"round_count must be >= 0, got {round_count}")
        if court_count < 0:
            raise ValueError(f"court_count must be >= 0, got {court_count}")

        self.roster = list(roster)
        self.round_count = round_count
        self.court_count = court_count
        self.ratings = dict(ratings) if ratings is not None else {}
        self.tracker = tracker if tracker is not None else PairingFrequencyTracker()
        self.weights = weights
        self.initial_rating = initial_rating
        self.max_pairing_frequency = max_pairing_frequency(
            round_count, court_count, len(self.roster)
        )
        self.shortfalls: list[tuple[int, int]] = []
        self.fallbacks: list[tuple[int, int]] = []

    def _first_player(self, available: Sequence[PlayerName]) -> PlayerName:
        def pairing_load(player: PlayerName) -> int:
            return sum(
                self.tracker.teammate_count(player, other) + self.tracker.opponent_count(player, other)
                for other in available
                if other != player
            )

        return min(available, key=lambda player: (pairing_load(player), player))

    def _candidate_score(self, candidate: PlayerName, chosen: Sequence[PlayerName]) -> float:
        tracker = self.tracker
        weights = self.weights
        return sum(
            weights.teammate * tracker.teammate_count(candidate, player)
            + weights.opponent * tracker.opponent_count(candidate, player)
            + weights.session_teammate * tracker.session_teammate_count(candidate, player)
            + weights.session_opponent * tracker.session_opponent_count(candidate, player)
            for player in chosen
        )

    def _is_eligible(
        self,
        candidate: PlayerName,
        chosen: Sequence[PlayerName],
        session_opponent_limit: int,
    ) -> bool:
        return all(
            self.tracker.teammate_count(candidate, player) < self.max_pairing_frequency
            and self.tracker.session_teammate_count(candidate, player) == 0
            and self.tracker.session_opponent_count(candidate, player) <= session_opponent_limit
            for player in chosen
        )

    def _next_player(
        self,
        available: Sequence[PlayerName],
        chosen: Sequence[PlayerName],
    ) -> tuple[PlayerName, bool]:
        """Return the next court player and whether both filters had to be dropped."""
        candidates = sorted(
            (player for player in available if player not in chosen),
            key=lambda player: (self._candidate_score(player, chosen), player),
        )
        for limit in ELIGIBILITY_SESSION_OPPONENT_LIMITS:
            for candidate in candidates:
                if self._is_eligible(candidate, chosen, limit):
                    return candidate, False

        logger.debug("No eligible partner for %s; taking best-scored %s", list(chosen), candidates[0])
        return candidates[0], True

    def _fill_court(self, available: Sequence[PlayerName]) -> tuple[list[PlayerName], bool]:
        chosen = [self._first_player(available)]
        fell_back = False
        while len(chosen) < PLAYERS_PER_COURT:
            player, forced = self._next_player(available, chosen)
            chosen.append(player)
            fell_back = fell_back or forced
        return chosen, fell_back

    def generate(self) -> list[Round]:
        self.tracker.reset_session()
        self.shortfalls = []
        self.fallbacks = []

        if self.court_count == 0:
            logger.warning("Not enough players to form even one court.")
            return []
        if len(self.roster) < PLAYERS_PER_COURT * self.court_count:
            logger.warning(
                "Roster of %d cannot fill %d courts; some courts will be skipped.",
                len(self.roster),
                self.court_count,
            )

        rounds: list[Round] = []
        for round_index in range(self.round_count):
            available = list(self.roster)
            courts: list[CourtAssignment] = []

            for court_index in range(self.court_count):
                if len(available) < PLAYERS_PER_COURT:
                    logger.warning(
                        "Not enough players to form a complete set on court %d of round %d.",
                        court_index + 1,
                        round_index + 1,
                    )
                    self.shortfalls.append((round_index + 1, court_index + 1))
                    continue

                court_players, fell_back = self._fill_court(available)
                if fell_back:
                    self.fallbacks.append((round_index + 1, court_index + 1))
                available = [player for player in available if player not in court_players]

                team1, team2 = balance_teams(
                    court_players,
                    self.ratings,
                    self.tracker,
                    default_rating=self.initial_rating,
                    weights=self.weights,
                )
                self.tracker.record_teams(team1, team2)

                courts.append(
                    CourtAssignment(
                        set_id=f"{round_index + 1}-{court_index + 1}",
                        court=court_index + 1,
                        teams=(TeamSlot(players=team1), TeamSlot(players=team2)),
                    )
                )

            rounds.append(Round(round_id=f"round-{round_index + 1}", courts=tuple(courts)))

        return rounds


def generate_schedule(
    roster: Sequence[PlayerName],
    round_count: int,
    court_count: int,
    ratings: Mapping[PlayerName, float] | None = None,
    *,
    history: Iterable[SessionResult] | None = None,
    weights: ScheduleWeights = DEFAULT_SCHEDULE_WEIGHTS,
    initial_rating: float = DEFAULT_INITIAL_RATING,
) -> list[Round]:
    """Generate ``round_count`` rounds of up to ``court_count`` 2v2 courts.

    Args:
        roster: Unique player names taking part in the session.
        round_count: Number of rounds to schedule.
        court_count: Courts per round; 0 yields an empty schedule.
        ratings: Player ratings; missing players use ``initial_rating``.
        history: Past sessions used to seed global pairing counts.
        weights: Scoring weights for court filling and team balancing.
        initial_rating: Rating assumed for unrated players.

    Returns:
        Rounds in order, each holding its courts in order.
    """
    tracker = PairingFrequencyTracker.from_history(history) if history is not None else None
    scheduler = RoundScheduler(
        roster,
        round_count,
        court_count,
        ratings,
        tracker=tracker,
        weights=weights,
        initial_rating=initial_rating,
    )
    return scheduler.generate()


def plan_session(
    roster: Sequence[PlayerName],
    ratings: Mapping[PlayerName, float] | None = None,
    *,
    history: Iterable[SessionResult] | None = None,
    round_count: int = DEFAULT_ROUNDS_PER_SESSION,
    weights: ScheduleWeights = DEFAULT_SCHEDULE_WEIGHTS,
    initial_rating: float = DEFAULT_INITIAL_RATING,
) -> list[Round]:
    """Schedule a session using as many full courts as the roster allows."""
    return generate_schedule(
        roster,
        round_count,
        courts_for_roster(len(roster)),
        ratings,
        history=history,
        weights=weights,
        initial_rating=initial_rating,
    )


__all__ = [
    "DEFAULT_INITIAL_RATING",
    "DEFAULT_ROUNDS_PER_SESSION",
    "PLAYERS_PER_COURT",
    "RoundScheduler",
    "courts_for_roster",
    "generate_schedule",
    "max_pairing_frequency",
    "plan_session",
]
