"""Queue team balancing: split a pool into the two closest-rated teams."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import combinations

from domain.ratings.common import RosterPlayer, resolve_rating
from domain.ratings.protocol import TeamSize


@dataclass(frozen=True)
class BalancedTeams:
    team_a: tuple[RosterPlayer, ...]
    team_b: tuple[RosterPlayer, ...]
    elo_difference: float


def _rating_sum(players: Sequence[RosterPlayer]) -> float:
    return sum(resolve_rating(player.elo) for player in players)


def calculate_balanced_teams(
    players: Sequence[RosterPlayer],
    team_size: TeamSize | str,
) -> BalancedTeams:
    """Pick the split of the first ``2 * players_per_team`` players with the smallest gap.

    Every combination is tried (team A in lexicographic index order) and the
    first split with the minimal rating-sum difference wins. A pool that is
    too small yields two empty teams.
    """
    size = team_size if isinstance(team_size, TeamSize) else TeamSize.parse(team_size)
    players_per_team = size.players_per_team
    total_players = players_per_team * 2

    if len(players) < total_players:
        return BalancedTeams(team_a=(), team_b=(), elo_difference=0.0)

    match_players = tuple(players[:total_players])
    best = BalancedTeams(team_a=(), team_b=(), elo_difference=math.inf)

    for team_a_indexes in combinations(range(total_players), players_per_team):
        chosen = set(team_a_indexes)
        team_a = tuple(match_players[index] for index in team_a_indexes)
        team_b = tuple(
            player for index, player in enumerate(match_players) if index not in chosen
        )
        difference = abs(_rating_sum(team_a) - _rating_sum(team_b))

        if difference < best.elo_difference:
            best = BalancedTeams(team_a=team_a, team_b=team_b, elo_difference=difference)

    return best


__all__ = ["BalancedTeams", "calculate_balanced_teams"]
