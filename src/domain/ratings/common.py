"""Shared types and helpers for rating calculations."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

Outcome = Literal["win", "loss", "draw"]

DEFAULT_RATING = 1500


def default_rating() -> int:
    """Rating assumed for a player with no stored rating for the queue."""
    return DEFAULT_RATING


def round_rating(value: float) -> int:
    """Round half away from zero (``2.5 -> 3``, ``-2.5 -> -3``)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # Compare the fraction directly; floor(x + 0.5) rounds 0.49999999999999994 up.
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def resolve_rating(elo: float | None, fallback: float | None = None) -> float:
    if elo is not None:
        return elo
    return default_rating() if fallback is None else fallback


def format_elo(rating: float) -> str:
    """Format a rating with thousands separators, e.g. ``6,679``."""
    return f"{round_rating(rating):,}"


@dataclass(frozen=True)
class RosterPlayer:
    """One participant on a roster; ``elo`` is ``None`` when no rating is stored."""

    player_id: str
    elo: float | None = None


@dataclass(frozen=True)
class TeamMatchOutcome:
    """Canonical team match result consumed by settlement algorithms.

    The uniform algorithm reads ``score_multiplier`` only; the weighted
    algorithm reads ``performance_margin`` only.
    """

    winning_roster: tuple[RosterPlayer, ...]
    losing_roster: tuple[RosterPlayer, ...]
    performance_margin: float = 0.0
    score_multiplier: float = 1.0
    match_id: str | None = None


@dataclass(frozen=True)
class PlayerEloChange:
    """Per-player settlement record (one row per player per match)."""

    player_id: str
    won: bool
    expected_score: float
    pre_elo: float
    elo_delta: int
    post_elo: int
    k_factor: float


def _parse_number(value: Any, *, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field}={value!r} is not a number")
    if not math.isfinite(value):
        raise ValueError(f"{field}={value!r} is not finite")
    return value


def parse_roster(raw: Sequence[Any], *, side: str) -> tuple[RosterPlayer, ...]:
    """Build a roster from a list of ``{"player_id": ..., "elo": ...}`` mappings."""
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise ValueError(f"{side} roster must be a list of players")

    players: list[RosterPlayer] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise ValueError(f"{side}[{index}] must be an object with player_id/elo")

        player_id = entry.get("player_id")
        if player_id is None or str(player_id).strip() == "":
            raise ValueError(f"{side}[{index}].player_id is required")

        elo_value = entry.get("elo")
        if elo_value is not None:
            elo_value = _parse_number(elo_value, field=f"{side}[{index}].elo")

        players.append(RosterPlayer(player_id=str(player_id), elo=elo_value))
    return tuple(players)


def parse_team_match_outcome(raw: Mapping[str, Any]) -> TeamMatchOutcome:
    """Build a ``TeamMatchOutcome`` from a JSON-like payload."""
    if "winning" not in raw or "losing" not in raw:
        raise ValueError("match payload requires both 'winning' and 'losing' rosters")

    winning_roster = parse_roster(raw["winning"], side="winning")
    losing_roster = parse_roster(raw["losing"], side="losing")

    winning_ids = {player.player_id for player in winning_roster}
    overlap = sorted(winning_ids.intersection(player.player_id for player in losing_roster))
    if overlap:
        raise ValueError(f"players appear on both rosters: {overlap}")

    match_id_value = raw.get("match_id")
    return TeamMatchOutcome(
        winning_roster=winning_roster,
        losing_roster=losing_roster,
        performance_margin=float(
            _parse_number(raw.get("performance_margin", 0.0), field="performance_margin")
        ),
        score_multiplier=float(
            _parse_number(raw.get("score_multiplier", 1.0), field="score_multiplier")
        ),
        match_id=None if match_id_value is None else str(match_id_value),
    )


__all__ = [
    "DEFAULT_RATING",
    "Outcome",
    "PlayerEloChange",
    "RosterPlayer",
    "TeamMatchOutcome",
    "default_rating",
    "format_elo",
    "parse_roster",
    "parse_team_match_outcome",
    "resolve_rating",
    "round_rating",
]
