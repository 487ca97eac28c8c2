# src/circuitlab_core/config.py
"""
Solver configuration: the tunable constants of the proximity topology and the
lumped circuit model, bundled in one immutable object.

A default `SolverConfig()` reproduces the classroom behaviour exactly. Custom
configurations can be built from a plain dictionary (for example one section
of a YAML file), where every physical value may be given either as a bare
number in base units or as a unit string understood by pint.
"""
import logging
import math
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import pint
import yaml

from .constants import (
    CONNECTION_DISTANCE,
    LED_BURNOUT_CURRENT_A,
    LED_FORWARD_VOLTAGE_V,
    LED_INTERNAL_RESISTANCE_OHM,
    MIN_TOTAL_RESISTANCE_OHM,
    SHORT_CIRCUIT_CURRENT_A,
    SHORT_CIRCUIT_THRESHOLD_OHM,
)
from .units import CURRENT_DIMENSIONALITY, RESISTANCE_DIMENSIONALITY, VOLTAGE_DIMENSIONALITY, Quantity, to_magnitude

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during solver configuration parsing."""
    pass


class InsightPolicy(Enum):
    """How the board-wide status message is chosen among clusters."""
    FIRST_MATCH = "first_match"   # The first cluster (in enumeration order) to produce a message wins.
    BY_SEVERITY = "by_severity"   # The most severe message on the board wins.

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class SolverConfig:
    """The immutable set of constants a solve pass runs with."""
    connection_distance: float = CONNECTION_DISTANCE
    led_internal_resistance: float = LED_INTERNAL_RESISTANCE_OHM
    led_forward_voltage: float = LED_FORWARD_VOLTAGE_V
    led_burnout_current: float = LED_BURNOUT_CURRENT_A
    short_circuit_threshold: float = SHORT_CIRCUIT_THRESHOLD_OHM
    short_circuit_current: float = SHORT_CIRCUIT_CURRENT_A
    min_total_resistance: float = MIN_TOTAL_RESISTANCE_OHM
    insight_policy: InsightPolicy = InsightPolicy.FIRST_MATCH


# Unit and expected dimensionality of each physical field. Distances are in board units.
_FIELD_UNITS: Dict[str, Tuple[str, Any]] = {
    "led_internal_resistance": ("ohm", RESISTANCE_DIMENSIONALITY),
    "led_forward_voltage": ("volt", VOLTAGE_DIMENSIONALITY),
    "led_burnout_current": ("ampere", CURRENT_DIMENSIONALITY),
    "short_circuit_threshold": ("ohm", RESISTANCE_DIMENSIONALITY),
    "short_circuit_current": ("ampere", CURRENT_DIMENSIONALITY),
    "min_total_resistance": ("ohm", RESISTANCE_DIMENSIONALITY),
}

# Fields that divide or bound a division: zero is not allowed.
_STRICTLY_POSITIVE = ("connection_distance", "min_total_resistance")


def _physical_value(key: str, raw_value: Any) -> float:
    unit, dimensionality = _FIELD_UNITS[key]
    if isinstance(raw_value, str):
        qty = Quantity(raw_value.strip())
        if not qty.dimensionless and qty.dimensionality != dimensionality:
            raise ValueError(
                f"'{key}' expects a quantity of dimension {dimensionality}, "
                f"got '{raw_value}' ({qty.dimensionality})."
            )
    return to_magnitude(raw_value, unit)


def parse_solver_config(raw_config: Dict[str, Any]) -> SolverConfig:
    """
    Parses a raw configuration dictionary into a `SolverConfig`.

    Missing keys keep their defaults. Unknown keys, incompatible units, negative
    or non-finite values are rejected, as is a zero connection distance or
    minimum total resistance.
    """
    if raw_config is None:
        return SolverConfig()
    if not isinstance(raw_config, dict):
        raise ConfigParsingError(f"Solver configuration must be a mapping, got {type(raw_config).__name__}.")

    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(raw_config) - known)
    if unknown:
        raise ConfigParsingError(f"Unknown solver configuration key(s): {unknown}. Known keys: {sorted(known)}.")

    values: Dict[str, Any] = {}
    try:
        for key, raw_value in raw_config.items():
            if key == "insight_policy":
                values[key] = InsightPolicy(str(raw_value).lower())
                continue

            if key == "connection_distance":
                value = to_magnitude(raw_value, "dimensionless")
            else:
                value = _physical_value(key, raw_value)

            if not math.isfinite(value) or value < 0:
                raise ValueError(f"'{key}' must be a finite, non-negative value, got {raw_value!r}.")
            if key in _STRICTLY_POSITIVE and value == 0:
                raise ValueError(f"'{key}' must be greater than zero.")
            values[key] = value

    except (KeyError, ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse solver configuration: {e}") from e

    config = SolverConfig(**values)
    logger.debug(f"Parsed solver configuration: {config}")
    return config


def load_solver_config(path: Union[str, Path]) -> SolverConfig:
    """Loads a `SolverConfig` from a YAML file whose root is the raw config mapping."""
    source = Path(path)
    if not source.is_file():
        raise ConfigParsingError(f"Solver configuration file not found at path: {source}")
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Invalid YAML syntax in '{source}': {e}") from e

    logger.info(f"Loading solver configuration from '{source}'.")
    return parse_solver_config(content or {})
