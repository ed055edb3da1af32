"""Roster-to-team rating reductions and matchmaking compatibility."""

from __future__ import annotations

from collections.abc import Sequence

from domain.ratings.common import RosterPlayer, round_rating

PLACEHOLDER_MEMBER_ELO = 1000
DEFAULT_MEMBER_ELO = 800
_SLOT_WEIGHT_STEP = 0.2
_MAX_WEIGHTED_TEAM_SIZE = 5


def total_rating(roster: Sequence[RosterPlayer]) -> float:
    """Sum of roster ratings; players without a rating count as 0."""
    return sum(player.elo or 0 for player in roster)


def average_rating(roster: Sequence[RosterPlayer]) -> float:
    if not roster:
        return 0.0
    return total_rating(roster) / float(len(roster))


def can_play_together(rating_a: float, rating_b: float, max_diff: float = 400.0) -> bool:
    return abs(rating_a - rating_b) <= max_diff


def weighted_team_rating(
    member_elos: Sequence[float],
    team_size: int = 4,
    placeholder_elo: float = PLACEHOLDER_MEMBER_ELO,
) -> int:
    """Team rating that leans on its strongest members.

    Ratings are sorted high to low, short rosters are padded with
    ``placeholder_elo``, and slot ``i`` of the top ``team_size`` is weighted
    ``1 - 0.2 * i`` (1.0, 0.8, 0.6, 0.4 for a 4v4 roster).
    """
    if team_size < 1 or team_size > _MAX_WEIGHTED_TEAM_SIZE:
        raise ValueError(f"team_size={team_size} must be between 1 and {_MAX_WEIGHTED_TEAM_SIZE}")
    if not member_elos:
        return 0

    sorted_elos = sorted(member_elos, reverse=True)
    sorted_elos.extend([placeholder_elo] * max(0, team_size - len(sorted_elos)))

    total_weight = 0.0
    weighted_sum = 0.0
    for index, elo in enumerate(sorted_elos[:team_size]):
        weight = 1.0 - (index * _SLOT_WEIGHT_STEP)
        total_weight += weight
        weighted_sum += elo * weight

    return round_rating(weighted_sum / total_weight)


def team_total_for_size(
    member_elos: Sequence[float | None],
    team_size: int = 4,
    default_member_elo: float = DEFAULT_MEMBER_ELO,
) -> float:
    """Sum of the top ``team_size`` member ratings for one team-size context."""
    if team_size < 1:
        raise ValueError(f"team_size={team_size} must be >= 1")

    resolved = sorted(
        (default_member_elo if elo is None else elo for elo in member_elos),
        reverse=True,
    )
    total = sum(resolved[:team_size])
    # An empty team (or one rated 0 across the board) gets the default member total.
    return total or default_member_elo * team_size


__all__ = [
    "DEFAULT_MEMBER_ELO",
    "PLACEHOLDER_MEMBER_ELO",
    "average_rating",
    "can_play_together",
    "team_total_for_size",
    "total_rating",
    "weighted_team_rating",
]
