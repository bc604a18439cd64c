"""Session scheduling modules."""

from kob.scheduling.config import (
    SchedulerSystemConfig,
    load_scheduler_system_config,
    load_scheduler_system_configs,
)
from kob.scheduling.frequency import PairingFrequencyTracker
from kob.scheduling.scheduler import (
    DEFAULT_ROUNDS_PER_SESSION,
    RoundScheduler,
    courts_for_roster,
    generate_schedule,
    max_pairing_frequency,
    plan_session,
)
from kob.scheduling.teams import balance_teams
from kob.scheduling.weights import DEFAULT_SCHEDULE_WEIGHTS, ScheduleWeights

__all__ = [
    "DEFAULT_ROUNDS_PER_SESSION",
    "DEFAULT_SCHEDULE_WEIGHTS",
    "PairingFrequencyTracker",
    "RoundScheduler",
    "ScheduleWeights",
    "SchedulerSystemConfig",
    "balance_teams",
    "courts_for_roster",
    "generate_schedule",
    "load_scheduler_system_config",
    "load_scheduler_system_configs",
    "max_pairing_frequency",
    "plan_session",
]
