"""Pairwise Elo logic."""

from __future__ import annotations

from dataclasses import dataclass

from domain.ratings.common import DEFAULT_RATING, Outcome, round_rating


@dataclass(frozen=True)
class EloParameters:
    k_factor: float = 32.0
    scale_factor: float = 400.0
    default_rating: float = float(DEFAULT_RATING)


_ACTUAL_SCORES: dict[str, float] = {
    "win": 1.0,
    "loss": 0.0,
    "draw": 0.5,
}


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float = 400.0) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def actual_score(outcome: Outcome) -> float:
    try:
        return _ACTUAL_SCORES[outcome]
    except KeyError as exc:
        raise ValueError(f"outcome={outcome!r} is not one of win/loss/draw") from exc


def update_rating(
    player_rating: float,
    opponent_rating: float,
    outcome: Outcome,
    k_factor: float = 32.0,
    *,
    scale_factor: float = 400.0,
) -> int:
    """Return the player's new rating after one game against ``opponent_rating``.

    The change is bounded by ``k_factor`` in either direction; equal ratings
    that draw leave the rating unchanged.
    """
    expected = calculate_expected_score(
        rating=player_rating,
        opponent_rating=opponent_rating,
        scale_factor=scale_factor,
    )
    return round_rating(player_rating + k_factor * (actual_score(outcome) - expected))


__all__ = [
    "EloParameters",
    "actual_score",
    "calculate_expected_score",
    "update_rating",
]
