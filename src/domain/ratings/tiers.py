"""Rating tier classification.

Two tables coexist and must stay separate: ``RANKED_TIERS`` drives the
ranked tier shown on profiles and leaderboards, ``DISPLAY_TIERS`` picks the
rank icon. Their cut points differ, so merging them would change what
players see.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

UNRANKED = "UNRANKED"


@dataclass(frozen=True)
class TierBand:
    """One tier band; ``max_rating`` of ``None`` means no upper bound."""

    name: str
    min_rating: float
    max_rating: float | None = None

    def contains(self, rating: float) -> bool:
        if rating < self.min_rating:
            return False
        return self.max_rating is None or rating <= self.max_rating


class TierTable:
    """Ordered tier bands, lowest first."""

    def __init__(self, name: str, bands: Sequence[TierBand]) -> None:
        validate_bands(name, bands)
        self.name = name
        self.bands: tuple[TierBand, ...] = tuple(bands)

    def __repr__(self) -> str:
        return f"TierTable(name={self.name!r}, bands={[band.name for band in self.bands]})"

    def band_for(self, rating: float) -> TierBand | None:
        # Inclusive lower bound, exclusive next lower bound, so 1199.5 stays Bronze.
        for band, next_band in zip(self.bands, self.bands[1:]):
            if band.min_rating <= rating < next_band.min_rating:
                return band
        top_band = self.bands[-1]
        return top_band if top_band.contains(rating) else None

    def classify(self, rating: float) -> str:
        band = self.band_for(rating)
        return UNRANKED if band is None else band.name

    def rank_index(self, tier_name: str) -> int:
        """Position of a tier in the ordering; ``UNRANKED`` sorts below all bands."""
        if tier_name == UNRANKED:
            return -1
        for index, band in enumerate(self.bands):
            if band.name == tier_name:
                return index
        raise ValueError(f"tier={tier_name!r} is not part of tier table {self.name!r}")

    def progress(self, rating: float) -> float:
        """Percentage progress through the current band, 0-100."""
        band = self.band_for(rating)
        if band is None:
            return 0.0
        if band.max_rating is None:
            return 100.0

        range_size = band.max_rating - band.min_rating
        if range_size <= 0:
            return 100.0
        progress = ((rating - band.min_rating) / range_size) * 100.0
        return min(max(progress, 0.0), 100.0)


def validate_bands(name: str, bands: Sequence[TierBand]) -> None:
    if not bands:
        raise ValueError(f"tier table {name!r} has no bands")

    names = [band.name for band in bands]
    if len(names) != len(set(names)):
        raise ValueError(f"tier table {name!r} has duplicate band names: {names}")
    if UNRANKED in names:
        raise ValueError(f"tier table {name!r} cannot use reserved band name {UNRANKED!r}")

    for index, band in enumerate(bands):
        is_last = index == len(bands) - 1
        if band.max_rating is None:
            if not is_last:
                raise ValueError(
                    f"tier table {name!r}: only the top band may omit max ({band.name})"
                )
            continue
        if band.max_rating < band.min_rating:
            raise ValueError(f"tier table {name!r}: band {band.name} has max < min")
        if not is_last and bands[index + 1].min_rating != band.max_rating + 1:
            raise ValueError(
                f"tier table {name!r}: band {bands[index + 1].name} must start at "
                f"{band.max_rating + 1} (after {band.name})"
            )


RANKED_TIERS = TierTable(
    "ranked",
    (
        TierBand("Bronze", 0, 1199),
        TierBand("Silver", 1200, 1499),
        TierBand("Gold", 1500, 1799),
        TierBand("Platinum", 1800, 2099),
        TierBand("Diamond", 2100, 2399),
        TierBand("Master", 2400),
    ),
)

DISPLAY_TIERS = TierTable(
    "display",
    (
        TierBand("Bronze", 0, 1099),
        TierBand("Silver", 1100, 1299),
        TierBand("Gold", 1300, 1499),
        TierBand("Platinum", 1500, 1799),
        TierBand("Diamond", 1800),
    ),
)


def tier_of(rating: float) -> str:
    """Ranked tier (Bronze through Master) for a rating."""
    return RANKED_TIERS.classify(rating)


def display_tier_of(rating: float) -> str:
    """Rank-icon tier (Bronze through Diamond) for a rating."""
    return DISPLAY_TIERS.classify(rating)


__all__ = [
    "DISPLAY_TIERS",
    "RANKED_TIERS",
    "TierBand",
    "TierTable",
    "UNRANKED",
    "display_tier_of",
    "tier_of",
    "validate_bands",
]
