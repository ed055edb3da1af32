"""Shared TOML config-loading utilities for rating and tier systems."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaseSystemConfig:
    """Metadata shared by every config file loaded from a config directory."""

    name: str
    description: str | None
    file_path: Path

    def as_config_json(self) -> dict[str, Any]:
        raise NotImplementedError


T = TypeVar("T", bound=BaseSystemConfig)


def parse_system_metadata(raw: dict[str, Any], file_path: Path) -> tuple[str, str | None]:
    """Return ``(name, description)`` from the ``[system]`` table."""
    system_raw = raw.get("system", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)
    return name, description


def load_system_configs(
    config_dir: Path,
    parser: Callable[[dict[str, Any], Path], T],
    *,
    duplicate_name_label: str = "rating",
) -> list[T]:
    """Load all TOML files in a directory with duplicate-name validation."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    systems: list[T] = []
    for file_path in config_files:
        with file_path.open("rb") as file:
            raw = tomllib.load(file)
        system = parser(raw, file_path)
        logger.debug("loaded %s system %r from %s", duplicate_name_label, system.name, file_path)
        systems.append(system)

    names = [system.name for system in systems]
    if len(names) != len(set(names)):
        raise ValueError(
            f"Duplicate {duplicate_name_label} system names found in {config_dir}: {names}"
        )

    return systems


__all__ = ["BaseSystemConfig", "load_system_configs", "parse_system_metadata"]
