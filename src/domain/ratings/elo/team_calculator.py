"""Team match settlement: turn one team result into per-player Elo changes.

Two algorithms are kept side by side because their callers differ:

* ``settle_uniform_team_elo`` gives every player on a side the same delta,
  derived from the team averages. Used by lighter team-vs-team views.
* ``settle_weighted_team_elo`` gives each player a delta scaled by their own
  rating tier and by the round margin of the win. Used for ranked settlement.

Both substitute ``default_rating()`` for players without a stored rating
before any averaging happens.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from domain.ratings.aggregate import average_rating
from domain.ratings.common import PlayerEloChange, RosterPlayer, resolve_rating, round_rating
from domain.ratings.elo.calculator import EloParameters, calculate_expected_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightedEloParameters:
    low_k_factor: float = 32.0
    mid_k_factor: float = 24.0
    high_k_factor: float = 16.0
    mid_rating_threshold: float = 1500.0
    high_rating_threshold: float = 2000.0
    margin_scale: float = 12.0
    performance_floor: float = 0.5
    performance_cap: float = 1.5
    scale_factor: float = 400.0


@dataclass(frozen=True)
class UniformTeamSettlement:
    """Rosters with their new ratings plus the single delta applied to both sides."""

    winning_roster: tuple[RosterPlayer, ...]
    losing_roster: tuple[RosterPlayer, ...]
    win_probability: float
    elo_delta: int
    k_factor: float
    winning_pre_elos: tuple[float, ...]
    losing_pre_elos: tuple[float, ...]

    def changes(self) -> list[PlayerEloChange]:
        changes = [
            PlayerEloChange(
                player_id=player.player_id,
                won=True,
                expected_score=self.win_probability,
                pre_elo=pre_elo,
                elo_delta=self.elo_delta,
                post_elo=int(player.elo),
                k_factor=self.k_factor,
            )
            for player, pre_elo in zip(self.winning_roster, self.winning_pre_elos)
        ]
        changes.extend(
            PlayerEloChange(
                player_id=player.player_id,
                won=False,
                expected_score=1.0 - self.win_probability,
                pre_elo=pre_elo,
                elo_delta=-self.elo_delta,
                post_elo=int(player.elo),
                k_factor=self.k_factor,
            )
            for player, pre_elo in zip(self.losing_roster, self.losing_pre_elos)
        )
        return changes


@dataclass(frozen=True)
class WeightedTeamSettlement:
    """Per-player changes for both sides, in roster order."""

    winning: tuple[PlayerEloChange, ...]
    losing: tuple[PlayerEloChange, ...]
    winning_expected: float
    losing_expected: float
    performance_factor: float

    @property
    def winning_deltas(self) -> list[int]:
        return [change.elo_delta for change in self.winning]

    @property
    def losing_deltas(self) -> list[int]:
        return [change.elo_delta for change in self.losing]

    @property
    def winning_ratings(self) -> list[int]:
        return [change.post_elo for change in self.winning]

    @property
    def losing_ratings(self) -> list[int]:
        return [change.post_elo for change in self.losing]

    def changes(self) -> list[PlayerEloChange]:
        return [*self.winning, *self.losing]


def _resolved_roster(roster: Sequence[RosterPlayer], fallback: float) -> tuple[RosterPlayer, ...]:
    return tuple(
        replace(player, elo=resolve_rating(player.elo, fallback)) for player in roster
    )


def performance_factor(
    performance_margin: float,
    params: WeightedEloParameters | None = None,
) -> float:
    """Reward multiplier for decisive wins: 0.5 at no margin, capped at 1.5."""
    params = params or WeightedEloParameters()
    raw_factor = params.performance_floor + (performance_margin / params.margin_scale)
    return max(params.performance_floor, min(params.performance_cap, raw_factor))


def tiered_k_factor(rating: float, params: WeightedEloParameters | None = None) -> float:
    """K-factor from the player's own rating, not the team average."""
    params = params or WeightedEloParameters()
    if rating < params.mid_rating_threshold:
        return params.low_k_factor
    if rating < params.high_rating_threshold:
        return params.mid_k_factor
    return params.high_k_factor


def settle_uniform_team_elo(
    winning_roster: Sequence[RosterPlayer],
    losing_roster: Sequence[RosterPlayer],
    score_multiplier: float = 1.0,
    *,
    params: EloParameters | None = None,
) -> UniformTeamSettlement:
    """Apply one team-level delta to every player on both sides."""
    params = params or EloParameters()
    winners = _resolved_roster(winning_roster, params.default_rating)
    losers = _resolved_roster(losing_roster, params.default_rating)

    win_probability = calculate_expected_score(
        rating=average_rating(winners),
        opponent_rating=average_rating(losers),
        scale_factor=params.scale_factor,
    )
    effective_k = params.k_factor * score_multiplier
    delta = round_rating(effective_k * (1.0 - win_probability))

    settlement = UniformTeamSettlement(
        winning_roster=tuple(
            replace(player, elo=round_rating(player.elo + delta)) for player in winners
        ),
        losing_roster=tuple(
            replace(player, elo=round_rating(player.elo - delta)) for player in losers
        ),
        win_probability=win_probability,
        elo_delta=delta,
        k_factor=effective_k,
        winning_pre_elos=tuple(player.elo for player in winners),
        losing_pre_elos=tuple(player.elo for player in losers),
    )
    logger.debug(
        "uniform settlement win_probability=%.4f delta=%d winners=%d losers=%d",
        win_probability,
        delta,
        len(winners),
        len(losers),
    )
    return settlement


def _side_changes(
    roster: Sequence[RosterPlayer],
    *,
    won: bool,
    expected: float,
    factor: float,
    params: WeightedEloParameters,
) -> tuple[PlayerEloChange, ...]:
    actual = 1.0 if won else 0.0
    changes: list[PlayerEloChange] = []
    for player in roster:
        pre_elo = player.elo
        k_factor = tiered_k_factor(pre_elo, params)
        delta = round_rating(k_factor * (actual - expected) * factor)
        changes.append(
            PlayerEloChange(
                player_id=player.player_id,
                won=won,
                expected_score=expected,
                pre_elo=pre_elo,
                elo_delta=delta,
                post_elo=round_rating(pre_elo + delta),
                k_factor=k_factor,
            )
        )
        logger.debug(
            "player=%s won=%s pre_elo=%s k=%s delta=%d",
            player.player_id,
            won,
            pre_elo,
            k_factor,
            delta,
        )
    return tuple(changes)


def settle_weighted_team_elo(
    winning_roster: Sequence[RosterPlayer],
    losing_roster: Sequence[RosterPlayer],
    performance_margin: float = 0.0,
    *,
    params: WeightedEloParameters | None = None,
    default_rating: float | None = None,
) -> WeightedTeamSettlement:
    """Settle a ranked team match with per-player K-factors and margin scaling."""
    params = params or WeightedEloParameters()
    fallback = resolve_rating(default_rating)
    winners = _resolved_roster(winning_roster, fallback)
    losers = _resolved_roster(losing_roster, fallback)

    winning_expected = calculate_expected_score(
        rating=average_rating(winners),
        opponent_rating=average_rating(losers),
        scale_factor=params.scale_factor,
    )
    losing_expected = 1.0 - winning_expected
    factor = performance_factor(performance_margin, params)

    return WeightedTeamSettlement(
        winning=_side_changes(
            winners,
            won=True,
            expected=winning_expected,
            factor=factor,
            params=params,
        ),
        losing=_side_changes(
            losers,
            won=False,
            expected=losing_expected,
            factor=factor,
            params=params,
        ),
        winning_expected=winning_expected,
        losing_expected=losing_expected,
        performance_factor=factor,
    )


__all__ = [
    "UniformTeamSettlement",
    "WeightedEloParameters",
    "WeightedTeamSettlement",
    "performance_factor",
    "settle_uniform_team_elo",
    "settle_weighted_team_elo",
    "tiered_k_factor",
]
