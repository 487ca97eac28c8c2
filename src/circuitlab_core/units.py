# src/circuitlab_core/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# Canonical dimensionalities for the three quantities a board value can carry.
VOLTAGE_DIMENSIONALITY = ureg.parse_expression('volt').dimensionality
RESISTANCE_DIMENSIONALITY = ureg.parse_expression('ohm').dimensionality
CURRENT_DIMENSIONALITY = ureg.parse_expression('ampere').dimensionality


def to_magnitude(raw: Union[int, float, str], unit: str) -> float:
    """
    Converts a raw value into a plain float expressed in `unit`.

    Bare numbers (and numeric strings without a unit) are taken to already be in
    `unit`. Strings with units ("1 kohm", "300 mA") are converted.

    Raises:
        pint.DimensionalityError: The value's unit is not compatible with `unit`.
        pint.UndefinedUnitError: The string names an unknown unit.
        ValueError: The value cannot be interpreted as a number.
    """
    if isinstance(raw, bool):
        raise ValueError(f"Expected a number or a unit string, got boolean {raw!r}.")
    if isinstance(raw, (int, float)):
        return float(raw)

    qty = Quantity(str(raw).strip())
    if qty.units == ureg.dimensionless:
        return float(qty.magnitude)
    return float(qty.to(unit).magnitude)
