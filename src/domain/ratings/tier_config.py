"""Load tier threshold tables from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_metadata
from domain.ratings.tiers import TierBand, TierTable


@dataclass(frozen=True)
class TierTableConfig(BaseSystemConfig):
    """One named tier table."""

    table: TierTable

    def as_config_json(self) -> dict[str, Any]:
        return {
            "tiers": [
                {"name": band.name, "min": band.min_rating, "max": band.max_rating}
                for band in self.table.bands
            ]
        }


def load_tier_table_configs(config_dir: Path) -> list[TierTableConfig]:
    """Load and validate all tier-table TOML files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_tier_table_config,
        duplicate_name_label="tier",
    )


def _parse_tier_table_config(raw: dict[str, Any], file_path: Path) -> TierTableConfig:
    name, description = parse_system_metadata(raw, file_path)

    tiers_raw = raw.get("tiers", [])
    if not isinstance(tiers_raw, list) or not tiers_raw:
        raise ValueError(f"{file_path}: at least one [[tiers]] entry is required")

    bands: list[TierBand] = []
    for index, tier_raw in enumerate(tiers_raw):
        band_name = str(tier_raw.get("name", "")).strip()
        if not band_name:
            raise ValueError(f"{file_path}: [[tiers]][{index}].name is required")
        if "min" not in tier_raw:
            raise ValueError(f"{file_path}: [[tiers]][{index}].min is required")

        max_value = tier_raw.get("max")
        bands.append(
            TierBand(
                name=band_name,
                min_rating=float(tier_raw["min"]),
                max_rating=None if max_value is None else float(max_value),
            )
        )

    try:
        table = TierTable(name, bands)
    except ValueError as exc:
        raise ValueError(f"{file_path}: {exc}") from exc

    return TierTableConfig(
        name=name,
        description=description,
        file_path=file_path,
        table=table,
    )


__all__ = ["TierTableConfig", "load_tier_table_configs"]
