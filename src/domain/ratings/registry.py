"""Registry of team settlement algorithms."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from domain.ratings.common import PlayerEloChange, TeamMatchOutcome
from domain.ratings.elo.config import EloSystemConfig, default_elo_system_config
from domain.ratings.elo.team_calculator import settle_uniform_team_elo, settle_weighted_team_elo
from domain.ratings.protocol import SettlementAlgorithm

logger = logging.getLogger(__name__)

SettleFn = Callable[[TeamMatchOutcome, EloSystemConfig], list[PlayerEloChange]]


@dataclass(frozen=True)
class SettlementDescriptor:
    """Everything a caller needs to settle a team match with one algorithm."""

    algorithm: SettlementAlgorithm
    description: str
    settle: SettleFn


_REGISTRY: dict[SettlementAlgorithm, SettlementDescriptor] = {}


def register(descriptor: SettlementDescriptor) -> None:
    """Register one settlement descriptor."""
    if descriptor.algorithm in _REGISTRY:
        raise ValueError(
            f"Duplicate settlement registration for algorithm={descriptor.algorithm.value}"
        )
    _REGISTRY[descriptor.algorithm] = descriptor


def get_all() -> list[SettlementDescriptor]:
    """Return all registered descriptors in deterministic order."""
    return [_REGISTRY[key] for key in sorted(_REGISTRY, key=lambda item: item.value)]


def get(algorithm: SettlementAlgorithm | str) -> SettlementDescriptor:
    """Get one registered descriptor by algorithm key."""
    try:
        return _REGISTRY[SettlementAlgorithm(algorithm)]
    except (KeyError, ValueError) as exc:
        available = ", ".join(descriptor.algorithm.value for descriptor in get_all())
        raise KeyError(
            f"No settlement algorithm registered for {algorithm!r}. Available: {available}"
        ) from exc


def settle_team_match(
    algorithm: SettlementAlgorithm | str,
    outcome: TeamMatchOutcome,
    config: EloSystemConfig | None = None,
) -> list[PlayerEloChange]:
    """Settle one team match and return per-player changes, winners first."""
    descriptor = get(algorithm)
    system_config = config or default_elo_system_config()
    changes = descriptor.settle(outcome, system_config)

    winner_deltas = [change.elo_delta for change in changes if change.won]
    loser_deltas = [change.elo_delta for change in changes if not change.won]
    logger.info(
        "settled match_id=%s algorithm=%s system=%s winners=%d losers=%d "
        "winner_deltas=%s loser_deltas=%s",
        outcome.match_id,
        descriptor.algorithm.value,
        system_config.name,
        len(winner_deltas),
        len(loser_deltas),
        winner_deltas,
        loser_deltas,
    )
    return changes


def _settle_uniform(outcome: TeamMatchOutcome, config: EloSystemConfig) -> list[PlayerEloChange]:
    logger.debug(
        "uniform settlement ignores performance_margin=%s for match_id=%s",
        outcome.performance_margin,
        outcome.match_id,
    )
    return settle_uniform_team_elo(
        outcome.winning_roster,
        outcome.losing_roster,
        outcome.score_multiplier,
        params=config.parameters,
    ).changes()


def _settle_weighted(outcome: TeamMatchOutcome, config: EloSystemConfig) -> list[PlayerEloChange]:
    logger.debug(
        "weighted settlement ignores score_multiplier=%s for match_id=%s",
        outcome.score_multiplier,
        outcome.match_id,
    )
    return settle_weighted_team_elo(
        outcome.winning_roster,
        outcome.losing_roster,
        outcome.performance_margin,
        params=config.weighted,
        default_rating=config.parameters.default_rating,
    ).changes()


def _register_defaults() -> None:
    if _REGISTRY:
        return
    register(
        SettlementDescriptor(
            algorithm=SettlementAlgorithm.UNIFORM,
            description="Legacy/display: one team-average delta for every player on a side.",
            settle=_settle_uniform,
        )
    )
    register(
        SettlementDescriptor(
            algorithm=SettlementAlgorithm.WEIGHTED,
            description="Ranked: per-player K-factor by rating tier, scaled by round margin.",
            settle=_settle_weighted,
        )
    )


_register_defaults()

__all__ = [
    "SettlementDescriptor",
    "get",
    "get_all",
    "register",
    "settle_team_match",
]
