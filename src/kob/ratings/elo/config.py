"""Load Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kob.config_base import (
    BaseSystemConfig,
    load_system_config,
    load_system_configs,
    parse_system_section,
)
from kob.ratings.elo.calculator import EloParameters


@dataclass(frozen=True)
class EloSystemConfig(BaseSystemConfig):
    """Configuration for one Elo rating replay."""

    parameters: EloParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_rating": self.parameters.initial_rating,
            "k_factor": self.parameters.k_factor,
            "k_factor_min": self.parameters.k_factor_min,
            "k_factor_decay": self.parameters.k_factor_decay,
            "point_diff_weight": self.parameters.point_diff_weight,
            "scale_factor": self.parameters.scale_factor,
            "min_ranked_matches": self.parameters.min_ranked_matches,
        }


def load_elo_system_config(file_path: Path) -> EloSystemConfig:
    """Load and validate a single Elo system TOML file."""
    return load_system_config(file_path, _parse_elo_system_config)


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all Elo system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_elo_system_config,
        duplicate_name_label="elo",
    )


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    name, description = parse_system_section(raw, file_path)
    elo_raw = raw.get("elo", {})

    parameters = EloParameters(
        initial_rating=float(elo_raw.get("initial_rating", 1000.0)),
        k_factor=float(elo_raw.get("k_factor", 32.0)),
        k_factor_min=float(elo_raw.get("k_factor_min", 16.0)),
        k_factor_decay=float(elo_raw.get("k_factor_decay", 0.1)),
        point_diff_weight=float(elo_raw.get("point_diff_weight", 0.01)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        min_ranked_matches=int(elo_raw.get("min_ranked_matches", 8)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.initial_rating <= 0.0:
        raise ValueError(f"{file_path}: [elo].initial_rating must be > 0")
    if parameters.k_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor must be > 0")
    if parameters.k_factor_min < 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor_min must be >= 0")
    if parameters.k_factor_decay < 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor_decay must be >= 0")
    if parameters.point_diff_weight < 0.0:
        raise ValueError(f"{file_path}: [elo].point_diff_weight must be >= 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if parameters.min_ranked_matches < 0:
        raise ValueError(f"{file_path}: [elo].min_ranked_matches must be >= 0")
