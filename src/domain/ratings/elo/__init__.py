"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    actual_score,
    calculate_expected_score,
    update_rating,
)
from domain.ratings.elo.config import (
    EloSystemConfig,
    default_elo_system_config,
    load_elo_system_configs,
)
from domain.ratings.elo.team_calculator import (
    UniformTeamSettlement,
    WeightedEloParameters,
    WeightedTeamSettlement,
    performance_factor,
    settle_uniform_team_elo,
    settle_weighted_team_elo,
    tiered_k_factor,
)

__all__ = [
    "EloParameters",
    "EloSystemConfig",
    "UniformTeamSettlement",
    "WeightedEloParameters",
    "WeightedTeamSettlement",
    "actual_score",
    "calculate_expected_score",
    "default_elo_system_config",
    "load_elo_system_configs",
    "performance_factor",
    "settle_uniform_team_elo",
    "settle_weighted_team_elo",
    "tiered_k_factor",
    "update_rating",
]
