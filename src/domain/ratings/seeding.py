"""Seed ratings for team-size contexts a player has not played yet."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from domain.ratings.protocol import ALL_TEAM_SIZES

NEW_PLAYER_ELO = 800
PREFERRED_TEAM_SIZE = 4


def seed_team_size_ratings(
    existing: Mapping[int, float | None],
    team_sizes: Iterable[int] = ALL_TEAM_SIZES,
    *,
    preferred_team_size: int = PREFERRED_TEAM_SIZE,
    new_player_elo: float = NEW_PLAYER_ELO,
) -> dict[int, float]:
    """Return ``{team_size: elo}`` for every team size missing from ``existing``.

    The seed value is the preferred-size (4v4) rating when present, otherwise
    the highest existing rating, otherwise ``new_player_elo``. Sizes that
    already have a record are never overwritten.
    """
    missing = [size for size in team_sizes if size not in existing]
    if not missing:
        return {}

    known = {size: elo for size, elo in existing.items() if elo is not None}
    if preferred_team_size in known:
        seed = known[preferred_team_size]
    elif known:
        seed = max(known.values())
    else:
        seed = new_player_elo

    return {size: seed for size in missing}


__all__ = ["NEW_PLAYER_ELO", "PREFERRED_TEAM_SIZE", "seed_team_size_ratings"]
