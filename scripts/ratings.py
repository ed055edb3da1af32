#!/usr/bin/env python3
"""Operator CLI for settling matches, checking tiers and balancing queues."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.ratings.balancer import calculate_balanced_teams
from domain.ratings.common import format_elo, parse_roster, parse_team_match_outcome
from domain.ratings.elo.calculator import update_rating
from domain.ratings.elo.config import (
    EloSystemConfig,
    default_elo_system_config,
    load_elo_system_configs,
)
from domain.ratings.protocol import SettlementAlgorithm, TeamSize
from domain.ratings.registry import get_all, settle_team_match
from domain.ratings.tier_config import load_tier_table_configs
from domain.ratings.tiers import DISPLAY_TIERS, RANKED_TIERS, TierTable

DEFAULT_ELO_CONFIG_DIR = ROOT_DIR / "configs" / "ratings" / "elo"
DEFAULT_TIER_CONFIG_DIR = ROOT_DIR / "configs" / "ratings" / "tiers"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Rating settlement, tier and balancing commands.",
)


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Root log level (DEBUG, INFO, WARNING, ...)."),
    ] = "WARNING",
) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level '{log_level}'", param_hint="--log-level")
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid JSON: {exc}") from exc


def _select_elo_config(config_dir: Path | None, config_name: str | None) -> EloSystemConfig:
    if config_dir is None and config_name is None:
        if not DEFAULT_ELO_CONFIG_DIR.is_dir():
            return default_elo_system_config()
        config_dir = DEFAULT_ELO_CONFIG_DIR

    target_dir = config_dir or DEFAULT_ELO_CONFIG_DIR
    configs = load_elo_system_configs(target_dir)
    if config_name is None:
        return configs[0]

    for config in configs:
        if config.name == config_name or config.file_path.name == config_name:
            return config
    raise typer.BadParameter(
        f"No config named '{config_name}' found in {target_dir}",
        param_hint="--config-name",
    )


def _tier_tables(config_dir: Path | None) -> dict[str, TierTable]:
    tables = {"ranked": RANKED_TIERS, "display": DISPLAY_TIERS}
    target_dir = config_dir or DEFAULT_TIER_CONFIG_DIR
    if config_dir is None and not target_dir.is_dir():
        return tables
    for config in load_tier_table_configs(target_dir):
        tables[config.name] = config.table
    return tables


@app.command()
def settle(
    payload: Annotated[
        Path,
        typer.Argument(help="JSON file with 'winning'/'losing' rosters and optional margin."),
    ],
    algorithm: Annotated[
        SettlementAlgorithm,
        typer.Option("--algorithm", help="Settlement algorithm."),
    ] = SettlementAlgorithm.WEIGHTED,
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Optional override for the Elo config directory."),
    ] = None,
    config_name: Annotated[
        str | None,
        typer.Option("--config-name", help="System name or file name (for example: ranked_default.toml)."),
    ] = None,
) -> None:
    """Settle one team match and print per-player rating changes."""
    try:
        outcome = parse_team_match_outcome(_read_json(payload))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="PAYLOAD") from exc

    config = _select_elo_config(config_dir, config_name)
    changes = settle_team_match(algorithm, outcome, config)

    typer.echo(
        f"match_id={outcome.match_id} algorithm={algorithm.value} system={config.name}"
    )
    for change in changes:
        side = "W" if change.won else "L"
        typer.echo(
            f"{side} {change.player_id:<20} "
            f"pre={format_elo(change.pre_elo):>6} delta={change.elo_delta:+4d} "
            f"post={format_elo(change.post_elo):>6} tier={RANKED_TIERS.classify(change.post_elo)}"
        )


@app.command()
def duel(
    winner_elo: Annotated[float, typer.Argument(help="Rating of the winner (or first player on a draw).")],
    loser_elo: Annotated[float, typer.Argument(help="Rating of the loser (or second player on a draw).")],
    draw: Annotated[bool, typer.Option("--draw", help="Score the game as a draw.")] = False,
    k_factor: Annotated[float, typer.Option("--k-factor")] = 32.0,
) -> None:
    """Pairwise 1v1 rating update."""
    if k_factor <= 0:
        raise typer.BadParameter("--k-factor must be greater than 0")

    first_outcome = "draw" if draw else "win"
    second_outcome = "draw" if draw else "loss"
    first_post = update_rating(winner_elo, loser_elo, first_outcome, k_factor)
    second_post = update_rating(loser_elo, winner_elo, second_outcome, k_factor)
    typer.echo(f"first  {format_elo(winner_elo):>6} -> {format_elo(first_post):>6}")
    typer.echo(f"second {format_elo(loser_elo):>6} -> {format_elo(second_post):>6}")


@app.command()
def compatible(
    rating_a: Annotated[float, typer.Argument(help="First player's rating.")],
    rating_b: Annotated[float, typer.Argument(help="Second player's rating.")],
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Optional override for the Elo config directory."),
    ] = None,
    config_name: Annotated[
        str | None,
        typer.Option("--config-name", help="System name or file name (for example: ranked_default.toml)."),
    ] = None,
) -> None:
    """Check whether two ratings are close enough to queue together."""
    config = _select_elo_config(config_dir, config_name)
    allowed = config.can_play_together(rating_a, rating_b)
    typer.echo(
        f"compatible={str(allowed).lower()} difference={abs(rating_a - rating_b):g} "
        f"max_rating_difference={config.max_rating_difference:g} system={config.name}"
    )


@app.command()
def tier(
    rating: Annotated[float, typer.Argument(help="Rating to classify.")],
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Optional override for the tier config directory."),
    ] = None,
) -> None:
    """Print the tier for a rating under every tier table."""
    for name, table in sorted(_tier_tables(config_dir).items()):
        typer.echo(
            f"{name:<10} tier={table.classify(rating):<10} progress={table.progress(rating):5.1f}%"
        )


@app.command()
def balance(
    payload: Annotated[
        Path,
        typer.Argument(help="JSON file with a 'players' list of {player_id, elo}."),
    ],
    team_size: Annotated[
        TeamSize,
        typer.Option("--team-size", help="Queue team size."),
    ] = TeamSize.FOUR_V_FOUR,
) -> None:
    """Split a queue pool into the two closest-rated teams."""
    raw = _read_json(payload)
    try:
        players = parse_roster(raw.get("players", []) if isinstance(raw, dict) else raw, side="players")
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="PAYLOAD") from exc

    result = calculate_balanced_teams(players, team_size)
    if not result.team_a:
        typer.echo(
            f"not enough players: need {team_size.players_per_team * 2}, got {len(players)}"
        )
        return

    typer.echo(f"team_size={team_size.value} elo_difference={result.elo_difference:g}")
    typer.echo("team_a: " + ", ".join(player.player_id for player in result.team_a))
    typer.echo("team_b: " + ", ".join(player.player_id for player in result.team_b))


@app.command("list-algorithms")
def list_algorithms() -> None:
    """Print all registered settlement algorithms."""
    for descriptor in get_all():
        typer.echo(f"{descriptor.algorithm.value:<10} {descriptor.description}")


if __name__ == "__main__":
    app()
