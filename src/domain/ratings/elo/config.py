"""Load Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_metadata
from domain.ratings.aggregate import can_play_together
from domain.ratings.elo.calculator import EloParameters
from domain.ratings.elo.team_calculator import WeightedEloParameters


@dataclass(frozen=True)
class EloSystemConfig(BaseSystemConfig):
    """Configuration for one Elo system (pairwise, uniform and weighted settlement)."""

    parameters: EloParameters
    weighted: WeightedEloParameters
    max_rating_difference: float = 400.0

    def can_play_together(self, rating_a: float, rating_b: float) -> bool:
        """Matchmaking check using this system's ``[matchmaking].max_rating_difference``."""
        return can_play_together(rating_a, rating_b, self.max_rating_difference)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "k_factor": self.parameters.k_factor,
            "scale_factor": self.parameters.scale_factor,
            "default_rating": self.parameters.default_rating,
            "low_k_factor": self.weighted.low_k_factor,
            "mid_k_factor": self.weighted.mid_k_factor,
            "high_k_factor": self.weighted.high_k_factor,
            "mid_rating_threshold": self.weighted.mid_rating_threshold,
            "high_rating_threshold": self.weighted.high_rating_threshold,
            "margin_scale": self.weighted.margin_scale,
            "performance_floor": self.weighted.performance_floor,
            "performance_cap": self.weighted.performance_cap,
            "max_rating_difference": self.max_rating_difference,
        }


def default_elo_system_config() -> EloSystemConfig:
    """Built-in system used when no config directory is given."""
    return EloSystemConfig(
        name="default",
        description="Built-in ranked defaults",
        file_path=Path("<builtin>"),
        parameters=EloParameters(),
        weighted=WeightedEloParameters(),
    )


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all Elo system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_elo_system_config,
        duplicate_name_label="elo",
    )


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    name, description = parse_system_metadata(raw, file_path)
    elo_raw = raw.get("elo", {})
    weighted_raw = raw.get("weighted", {})
    matchmaking_raw = raw.get("matchmaking", {})

    parameters = EloParameters(
        k_factor=float(elo_raw.get("k_factor", 32.0)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        default_rating=float(elo_raw.get("default_rating", 1500.0)),
    )
    weighted = WeightedEloParameters(
        low_k_factor=float(weighted_raw.get("low_k_factor", 32.0)),
        mid_k_factor=float(weighted_raw.get("mid_k_factor", 24.0)),
        high_k_factor=float(weighted_raw.get("high_k_factor", 16.0)),
        mid_rating_threshold=float(weighted_raw.get("mid_rating_threshold", 1500.0)),
        high_rating_threshold=float(weighted_raw.get("high_rating_threshold", 2000.0)),
        margin_scale=float(weighted_raw.get("margin_scale", 12.0)),
        performance_floor=float(weighted_raw.get("performance_floor", 0.5)),
        performance_cap=float(weighted_raw.get("performance_cap", 1.5)),
        scale_factor=parameters.scale_factor,
    )
    max_rating_difference = float(matchmaking_raw.get("max_rating_difference", 400.0))

    _validate_parameters(file_path=file_path, parameters=parameters)
    _validate_weighted(file_path=file_path, weighted=weighted)
    if max_rating_difference < 0.0:
        raise ValueError(f"{file_path}: [matchmaking].max_rating_difference must be >= 0")

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        weighted=weighted,
        max_rating_difference=max_rating_difference,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.k_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if parameters.default_rating < 0.0:
        raise ValueError(f"{file_path}: [elo].default_rating must be >= 0")


def _validate_weighted(*, file_path: Path, weighted: WeightedEloParameters) -> None:
    if weighted.low_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [weighted].low_k_factor must be > 0")
    if weighted.mid_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [weighted].mid_k_factor must be > 0")
    if weighted.high_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [weighted].high_k_factor must be > 0")
    if weighted.high_rating_threshold <= weighted.mid_rating_threshold:
        raise ValueError(
            f"{file_path}: [weighted].high_rating_threshold must be > mid_rating_threshold"
        )
    if weighted.margin_scale <= 0.0:
        raise ValueError(f"{file_path}: [weighted].margin_scale must be > 0")
    if weighted.performance_floor <= 0.0:
        raise ValueError(f"{file_path}: [weighted].performance_floor must be > 0")
    if weighted.performance_floor > weighted.performance_cap:
        raise ValueError(
            f"{file_path}: [weighted].performance_floor must be <= performance_cap"
        )
