"""King-of-the-Beach league core: Elo ratings and 2v2 session scheduling."""

from kob.common import (
    CourtAssignment,
    MatchResult,
    PlayerRating,
    Round,
    SessionResult,
    TeamSlot,
)
from kob.ratings import (
    EloParameters,
    EnhancedRanking,
    compute_ratings,
    enhance_rankings,
    rating_lookup,
)
from kob.scheduling import (
    PairingFrequencyTracker,
    RoundScheduler,
    ScheduleWeights,
    generate_schedule,
    plan_session,
)

__all__ = [
    "CourtAssignment",
    "EloParameters",
    "EnhancedRanking",
    "MatchResult",
    "PairingFrequencyTracker",
    "PlayerRating",
    "Round",
    "RoundScheduler",
    "ScheduleWeights",
    "SessionResult",
    "TeamSlot",
    "compute_ratings",
    "enhance_rankings",
    "generate_schedule",
    "plan_session",
    "rating_lookup",
]
