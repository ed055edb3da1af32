"""Rating-system domain modules."""

from domain.ratings.aggregate import (
    average_rating,
    can_play_together,
    team_total_for_size,
    total_rating,
    weighted_team_rating,
)
from domain.ratings.common import (
    DEFAULT_RATING,
    PlayerEloChange,
    RosterPlayer,
    TeamMatchOutcome,
    default_rating,
    round_rating,
)
from domain.ratings.protocol import SettlementAlgorithm, TeamSize
from domain.ratings.tiers import DISPLAY_TIERS, RANKED_TIERS, UNRANKED, display_tier_of, tier_of

__all__ = [
    "DEFAULT_RATING",
    "DISPLAY_TIERS",
    "PlayerEloChange",
    "RANKED_TIERS",
    "RosterPlayer",
    "SettlementAlgorithm",
    "TeamMatchOutcome",
    "TeamSize",
    "UNRANKED",
    "average_rating",
    "can_play_together",
    "default_rating",
    "display_tier_of",
    "round_rating",
    "team_total_for_size",
    "tier_of",
    "total_rating",
    "weighted_team_rating",
]
