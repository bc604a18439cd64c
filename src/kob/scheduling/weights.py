"""Scoring weights for court filling and team balancing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScheduleWeights:
    # Court filling: cost of a candidate against each already-chosen player.
    teammate: float = 1.0
    opponent: float = 1.0
    session_teammate: float = 100.0
    session_opponent: float = 50.0
    # Team balancing: cost of one split of the four court players.
    balance_rating: float = 200.0
    balance_teammate: float = 1.0
    balance_session_teammate: float = 50.0
    balance_session_opponent: float = 100.0


DEFAULT_SCHEDULE_WEIGHTS = ScheduleWeights()

__all__ = ["DEFAULT_SCHEDULE_WEIGHTS", "ScheduleWeights"]
