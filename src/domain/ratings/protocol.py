"""Shared enums for rating settlement and matchmaking."""

from __future__ import annotations

from enum import Enum


class SettlementAlgorithm(str, Enum):
    """How a team match result is turned into per-player rating changes."""

    UNIFORM = "uniform"
    WEIGHTED = "weighted"


class TeamSize(str, Enum):
    """Queue/team-size context a rating belongs to."""

    ONE_V_ONE = "1v1"
    TWO_V_TWO = "2v2"
    THREE_V_THREE = "3v3"
    FOUR_V_FOUR = "4v4"
    FIVE_V_FIVE = "5v5"

    @property
    def players_per_team(self) -> int:
        return int(self.value.split("v", 1)[0])

    @classmethod
    def parse(cls, label: str | int) -> TeamSize:
        """Accept ``"4v4"``, ``"4"`` or ``4``."""
        text = str(label).strip().lower()
        if text.isdigit():
            text = f"{text}v{text}"
        for size in cls:
            if size.value == text:
                return size
        available = ", ".join(size.value for size in cls)
        raise ValueError(f"team_size={label!r} is not one of {available}")


ALL_TEAM_SIZES: tuple[int, ...] = tuple(size.players_per_team for size in TeamSize)


__all__ = ["ALL_TEAM_SIZES", "SettlementAlgorithm", "TeamSize"]
