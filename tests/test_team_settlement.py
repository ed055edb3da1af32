"""Unit tests for uniform and weighted team match settlement."""

from __future__ import annotations

import pytest

from domain.ratings.common import RosterPlayer
from domain.ratings.elo.calculator import EloParameters
from domain.ratings.elo.team_calculator import (
    WeightedEloParameters,
    performance_factor,
    settle_uniform_team_elo,
    settle_weighted_team_elo,
    tiered_k_factor,
)


def _roster(prefix: str, *elos: float | None) -> list[RosterPlayer]:
    return [RosterPlayer(player_id=f"{prefix}{index}", elo=elo) for index, elo in enumerate(elos)]


def test_performance_factor_bounds() -> None:
    assert performance_factor(0) == pytest.approx(0.5)
    assert performance_factor(6) == pytest.approx(1.0)
    assert performance_factor(12) == pytest.approx(1.5)
    assert performance_factor(24) == pytest.approx(1.5)


def test_performance_factor_never_drops_below_floor() -> None:
    assert performance_factor(-6) == pytest.approx(0.5)


def test_tiered_k_factor_uses_rating_bands() -> None:
    assert tiered_k_factor(1000) == 32
    assert tiered_k_factor(1499) == 32
    assert tiered_k_factor(1500) == 24
    assert tiered_k_factor(1999) == 24
    assert tiered_k_factor(2000) == 16
    assert tiered_k_factor(2800) == 16


def test_tiered_k_factor_honours_custom_parameters() -> None:
    params = WeightedEloParameters(low_k_factor=40.0, mid_rating_threshold=1200.0)
    assert tiered_k_factor(1100, params) == 40
    assert tiered_k_factor(1200, params) == 24


def test_uniform_settlement_applies_same_delta_to_each_side() -> None:
    settlement = settle_uniform_team_elo(
        _roster("w", 1600, 1600),
        _roster("l", 1400, 1400),
    )
    assert settlement.win_probability == pytest.approx(0.7597, abs=1e-4)
    assert settlement.elo_delta == 8
    assert [player.elo for player in settlement.winning_roster] == [1608, 1608]
    assert [player.elo for player in settlement.losing_roster] == [1392, 1392]


def test_uniform_settlement_gives_identical_delta_across_uneven_roster() -> None:
    settlement = settle_uniform_team_elo(
        _roster("w", 1200, 2100, 1650),
        _roster("l", 1500, 1700, 1800),
    )
    changes = settlement.changes()
    winner_deltas = {change.elo_delta for change in changes if change.won}
    loser_deltas = {change.elo_delta for change in changes if not change.won}
    assert winner_deltas == {settlement.elo_delta}
    assert loser_deltas == {-settlement.elo_delta}


def test_uniform_settlement_defaults_missing_rating() -> None:
    settlement = settle_uniform_team_elo(_roster("w", None), _roster("l", 1500))
    assert settlement.elo_delta == 16
    assert settlement.winning_roster[0].elo == 1516
    assert settlement.losing_roster[0].elo == 1484


def test_uniform_settlement_scales_with_score_multiplier() -> None:
    settlement = settle_uniform_team_elo(
        _roster("w", 1500, 1500),
        _roster("l", 1500, 1500),
        score_multiplier=2.0,
    )
    assert settlement.elo_delta == 32
    assert settlement.k_factor == pytest.approx(64.0)


def test_uniform_settlement_uses_configured_default_rating() -> None:
    settlement = settle_uniform_team_elo(
        _roster("w", None),
        _roster("l", None),
        params=EloParameters(default_rating=1200.0),
    )
    assert settlement.winning_roster[0].elo == 1216
    assert settlement.losing_roster[0].elo == 1184


def test_uniform_settlement_keeps_player_identity_and_order() -> None:
    winners = _roster("w", 1500, 1510, 1520)
    settlement = settle_uniform_team_elo(winners, _roster("l", 1500, 1500, 1500))
    assert [player.player_id for player in settlement.winning_roster] == ["w0", "w1", "w2"]


def test_weighted_settlement_even_four_stack() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", 1500, 1500, 1500, 1500),
        _roster("l", 1500, 1500, 1500, 1500),
        performance_margin=6,
    )
    assert settlement.performance_factor == pytest.approx(1.0)
    assert settlement.winning_expected == pytest.approx(0.5)
    assert settlement.losing_expected == pytest.approx(0.5)
    # 1500 sits in the 1500-1999 band, so K=24.
    assert settlement.winning_deltas == [12, 12, 12, 12]
    assert settlement.losing_deltas == [-12, -12, -12, -12]
    assert settlement.winning_ratings == [1512, 1512, 1512, 1512]
    assert settlement.losing_ratings == [1488, 1488, 1488, 1488]


def test_weighted_settlement_low_band_even_match() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", 1400, 1400),
        _roster("l", 1400, 1400),
        performance_margin=6,
    )
    assert settlement.winning_deltas == [16, 16]
    assert settlement.losing_deltas == [-16, -16]


def test_weighted_settlement_uses_each_players_own_k_factor() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", 1400, 2100),
        _roster("l", 1750, 1750),
        performance_margin=12,
    )
    assert settlement.winning_expected == pytest.approx(0.5)
    assert settlement.performance_factor == pytest.approx(1.5)
    assert settlement.winning_deltas == [24, 12]
    assert settlement.winning_ratings == [1424, 2112]
    assert settlement.losing_deltas == [-18, -18]
    assert settlement.losing_ratings == [1732, 1732]


def test_weighted_settlement_minimal_margin_halves_reward() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", 1000, 1000),
        _roster("l", 1000, 1000),
        performance_margin=0,
    )
    assert settlement.winning_deltas == [8, 8]
    assert settlement.losing_deltas == [-8, -8]


def test_weighted_settlement_losing_deltas_never_positive() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", 900, 1000),
        _roster("l", 2600, 2500),
        performance_margin=3,
    )
    assert all(delta > 0 for delta in settlement.winning_deltas)
    assert all(delta <= 0 for delta in settlement.losing_deltas)


def test_weighted_settlement_defaults_missing_rating() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", None),
        _roster("l", 1500),
        performance_margin=6,
    )
    change = settlement.winning[0]
    assert change.pre_elo == pytest.approx(1500.0)
    assert change.k_factor == pytest.approx(24.0)
    assert change.post_elo == 1512


def test_weighted_settlement_preserves_roster_order() -> None:
    settlement = settle_weighted_team_elo(
        _roster("w", 2200, 1300, 1700),
        _roster("l", 1500, 1500, 1500),
        performance_margin=4,
    )
    assert [change.player_id for change in settlement.winning] == ["w0", "w1", "w2"]
    assert [change.player_id for change in settlement.losing] == ["l0", "l1", "l2"]
    assert [change.player_id for change in settlement.changes()] == [
        "w0",
        "w1",
        "w2",
        "l0",
        "l1",
        "l2",
    ]
    for change in settlement.changes():
        assert change.post_elo - change.pre_elo == change.elo_delta
