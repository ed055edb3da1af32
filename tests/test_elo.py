"""Unit tests for pairwise Elo calculations."""

from __future__ import annotations

import pytest

from domain.ratings.common import default_rating, round_rating
from domain.ratings.elo.calculator import (
    EloParameters,
    actual_score,
    calculate_expected_score,
    update_rating,
)

RATING_GRID = (0.0, 800.0, 1200.0, 1500.0, 1537.0, 1900.0, 2400.0, 3100.0)


def test_elo_parameters_defaults_are_expected_constants() -> None:
    params = EloParameters()
    assert params.k_factor == pytest.approx(32.0)
    assert params.scale_factor == pytest.approx(400.0)
    assert params.default_rating == pytest.approx(1500.0)
    assert default_rating() == 1500


def test_expected_score_equal_ratings_is_half() -> None:
    assert calculate_expected_score(1500.0, 1500.0) == pytest.approx(0.5)


def test_expected_scores_sum_to_one() -> None:
    for rating in RATING_GRID:
        for opponent_rating in RATING_GRID:
            expected_a = calculate_expected_score(rating, opponent_rating)
            expected_b = calculate_expected_score(opponent_rating, rating)
            assert expected_a + expected_b == pytest.approx(1.0)


def test_expected_score_approaches_bounds_for_large_gap() -> None:
    assert calculate_expected_score(2500.0, 1500.0) > 0.99
    assert calculate_expected_score(1500.0, 2500.0) < 0.01


def test_actual_score_values() -> None:
    assert actual_score("win") == 1.0
    assert actual_score("loss") == 0.0
    assert actual_score("draw") == 0.5


def test_unknown_outcome_raises() -> None:
    with pytest.raises(ValueError, match=r"outcome='forfeit' is not one of win/loss/draw"):
        update_rating(1500.0, 1500.0, "forfeit")  # type: ignore[arg-type]


def test_even_win_gains_half_k() -> None:
    assert update_rating(1500, 1500, "win", 32) == 1516
    assert update_rating(1500, 1500, "loss", 32) == 1484


def test_underdog_win_gains_more_than_even_win() -> None:
    new_rating = update_rating(1500, 1900, "win", 32)
    assert new_rating > 1500 + 16
    assert new_rating == 1529


def test_draw_between_equal_ratings_is_unchanged() -> None:
    for rating in RATING_GRID:
        for k_factor in (8.0, 16.0, 32.0, 64.0):
            assert update_rating(rating, rating, "draw", k_factor) == round_rating(rating)


def test_win_and_loss_are_symmetric_for_equal_k() -> None:
    for rating in RATING_GRID:
        for opponent_rating in RATING_GRID:
            gain = update_rating(rating, opponent_rating, "win", 32) - rating
            loss = update_rating(opponent_rating, rating, "loss", 32) - opponent_rating
            assert gain == -loss


def test_delta_is_bounded_by_k_factor() -> None:
    for rating in RATING_GRID:
        for opponent_rating in RATING_GRID:
            for outcome in ("win", "loss", "draw"):
                new_rating = update_rating(rating, opponent_rating, outcome, 32)
                assert abs(new_rating - rating) <= 32


def test_scale_factor_widens_expected_score() -> None:
    narrow = calculate_expected_score(1400.0, 1600.0, 400.0)
    wide = calculate_expected_score(1400.0, 1600.0, 800.0)
    assert narrow < wide < 0.5


def test_round_rating_rounds_half_away_from_zero() -> None:
    assert round_rating(2.5) == 3
    assert round_rating(-2.5) == -3
    assert round_rating(1515.4999) == 1515
    assert round_rating(-0.4) == 0
    assert round_rating(16.0) == 16


def test_round_rating_just_below_half_rounds_down() -> None:
    assert round_rating(0.49999999999999994) == 0
    assert round_rating(-0.49999999999999994) == 0
    assert round_rating(1514.4999999999998) == 1514
