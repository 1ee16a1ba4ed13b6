"""Configuration loader."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .tables import (
    AT_LEAST,
    AT_MOST,
    DEFAULT_PRICING_TABLES,
    PricingTables,
    StepTable,
    WarningThresholds,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FAIR_RENT_CONFIG"


def default_config_path() -> Path:
    """$FAIR_RENT_CONFIG if set, else config.yaml at the project root."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / "config.yaml"


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load config from YAML file."""
    path = Path(config_path) if config_path else default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config is not valid YAML: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    logger.debug("Loaded pricing config from %s", path)
    return data


def _number(value: Any, where: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{where}: expected a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ConfigError(f"{where}: expected a finite number, got {value!r}")
    return number


def _section(config: dict[str, Any], key: str) -> dict[str, Any]:
    """A nested mapping section; absent means empty."""
    section = config.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"{key}: expected a mapping")
    return section


def _float_map(config: dict[str, Any], key: str, default: Any) -> dict[str, float]:
    """Extract a name -> number mapping, keeping the default when absent."""
    section = config.get(key)
    if section is None:
        return dict(default)
    if not isinstance(section, dict):
        raise ConfigError(f"{key}: expected a mapping")
    return {str(k): _number(v, f"{key}.{k}") for k, v in section.items()}


def _step_table(config: dict[str, Any], key: str, default: StepTable, mode: str) -> StepTable:
    """Extract a threshold -> multiplier table."""
    section = config.get(key)
    if section is None:
        return default
    if not isinstance(section, dict) or not section:
        raise ConfigError(f"{key}: expected a non-empty mapping of threshold -> multiplier")
    pairs = tuple(
        (_number(k, f"{key} threshold"), _number(v, f"{key}.{k}")) for k, v in section.items()
    )
    return StepTable(pairs, mode)


def get_warning_thresholds(config: dict[str, Any]) -> WarningThresholds:
    """Extract caution-check limits from config."""
    w = _section(config, "warnings")
    d = WarningThresholds()

    def limit(key: str) -> float:
        return _number(w.get(key, getattr(d, key)), f"warnings.{key}")

    return WarningThresholds(
        min_square_footage=limit("min_square_footage"),
        max_bedrooms=int(limit("max_bedrooms")),
        max_location_multiplier=limit("max_location_multiplier"),
        min_year_built=int(limit("min_year_built")),
        max_floor=int(limit("max_floor")),
        max_amenity_share=limit("max_amenity_share"),
    )


def get_pricing_tables(config: dict[str, Any]) -> PricingTables:
    """Build the engine's coefficient tables; absent sections keep the defaults."""
    d = DEFAULT_PRICING_TABLES
    band = _section(config, "ethical_band")
    location = _float_map(config, "location_multipliers", {})
    default_location = location.pop("default", d.default_location_multiplier)
    return PricingTables(
        base_rates=_float_map(config, "base_rates", d.base_rates),
        housing_type_multipliers=_float_map(
            config, "housing_type_multipliers", d.housing_type_multipliers
        ),
        location_multipliers=location or dict(d.location_multipliers),
        amenity_values=_float_map(config, "amenity_values", d.amenity_values),
        feature_values=_float_map(config, "feature_values", d.feature_values),
        bedroom_adjustments=_step_table(config, "bedroom_adjustments", d.bedroom_adjustments, AT_LEAST),
        bathroom_adjustments=_step_table(config, "bathroom_adjustments", d.bathroom_adjustments, AT_LEAST),
        size_efficiency=_step_table(config, "size_efficiency", d.size_efficiency, AT_MOST),
        quality_by_year=_step_table(config, "quality_by_year", d.quality_by_year, AT_LEAST),
        floor_adjustments=_step_table(config, "floor_adjustments", d.floor_adjustments, AT_MOST),
        room_base_price=_number(config.get("room_base_price", d.room_base_price), "room_base_price"),
        default_location_multiplier=default_location,
        band_below=_number(band.get("below", d.band_below), "ethical_band.below"),
        band_above=_number(band.get("above", d.band_above), "ethical_band.above"),
        warnings=get_warning_thresholds(config),
    )
