"""Elo rating modules."""

from kob.ratings.elo.calculator import (
    DEFAULT_ELO_PARAMETERS,
    EloParameters,
    PlayerEloCalculator,
    PlayerEloEvent,
    calculate_expected_score,
    calculate_k_factor,
    calculate_rating_deltas,
    compute_ratings,
    rating_lookup,
    sort_sessions,
)
from kob.ratings.elo.config import (
    EloSystemConfig,
    load_elo_system_config,
    load_elo_system_configs,
)

__all__ = [
    "DEFAULT_ELO_PARAMETERS",
    "EloParameters",
    "EloSystemConfig",
    "PlayerEloCalculator",
    "PlayerEloEvent",
    "calculate_expected_score",
    "calculate_k_factor",
    "calculate_rating_deltas",
    "compute_ratings",
    "load_elo_system_config",
    "load_elo_system_configs",
    "rating_lookup",
    "sort_sessions",
]
