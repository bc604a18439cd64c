"""Rating modules."""

from kob.ratings.elo import EloParameters, PlayerEloCalculator, compute_ratings, rating_lookup
from kob.ratings.rankings import (
    EnhancedRanking,
    HeadToHeadRecord,
    RankedPlayer,
    enhance_rankings,
    head_to_head_records,
    rank_players,
)

__all__ = [
    "EloParameters",
    "EnhancedRanking",
    "HeadToHeadRecord",
    "PlayerEloCalculator",
    "RankedPlayer",
    "compute_ratings",
    "enhance_rankings",
    "head_to_head_records",
    "rank_players",
    "rating_lookup",
]
