"""Load scheduler system definitions from TOML files."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from kob.config_base import (
    BaseSystemConfig,
    load_system_config,
    load_system_configs,
    parse_system_section,
)
from kob.scheduling.scheduler import DEFAULT_ROUNDS_PER_SESSION
from kob.scheduling.weights import ScheduleWeights


@dataclass(frozen=True)
class SchedulerSystemConfig(BaseSystemConfig):
    """Configuration for generating session schedules."""

    rounds_per_session: int
    weights: ScheduleWeights

    def as_config_json(self) -> dict[str, Any]:
        return {"rounds_per_session": self.rounds_per_session, **asdict(self.weights)}


def load_scheduler_system_config(file_path: Path) -> SchedulerSystemConfig:
    """Load and validate a single scheduler TOML file."""
    return load_system_config(file_path, _parse_scheduler_system_config)


def load_scheduler_system_configs(config_dir: Path) -> list[SchedulerSystemConfig]:
    """Load and validate all scheduler TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_scheduler_system_config,
        duplicate_name_label="scheduler",
    )


def _parse_scheduler_system_config(raw: dict[str, Any], file_path: Path) -> SchedulerSystemConfig:
    name, description = parse_system_section(raw, file_path)
    scheduler_raw = raw.get("scheduler", {})

    rounds_per_session = int(scheduler_raw.get("rounds_per_session", DEFAULT_ROUNDS_PER_SESSION))
    if rounds_per_session < 1:
        raise ValueError(f"{file_path}: [scheduler].rounds_per_session must be >= 1")

    defaults = ScheduleWeights()
    weight_values: dict[str, float] = {}
    for field in fields(ScheduleWeights):
        value = float(scheduler_raw.get(field.name, getattr(defaults, field.name)))
        if value < 0.0:
            raise ValueError(f"{file_path}: [scheduler].{field.name} must be >= 0")
        weight_values[field.name] = value

    return SchedulerSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        rounds_per_session=rounds_per_session,
        weights=ScheduleWeights(**weight_values),
    )
