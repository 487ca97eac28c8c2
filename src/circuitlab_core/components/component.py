# src/circuitlab_core/components/component.py
"""
The board's only persistent entity, and the per-type defaults used when one is created.

`Component` is frozen: the solver never edits a record in place, it returns updated
copies built with `dataclasses.replace`. The fields split into two groups with a
single writer each. Placement fields (`position`, `value`, `is_open`, `label`,
`rotation`) are written by the user-facing shell. Computed fields (`current`,
`voltage_drop`, `power`, `is_active`, `is_burned_out`) are written only by the solver.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .base_enums import ComponentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """A point on the board, in board units."""
    x: float
    y: float

    def distance_to(self, other: Position) -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


@dataclass(frozen=True)
class ComponentDefaults:
    """What a freshly placed component of one type looks like."""
    value: float
    label: str
    # Unit the value is expressed in, or None when the value is not read by the solver.
    unit: Optional[str]
    starts_open: bool = False


COMPONENT_DEFAULTS: Dict[ComponentType, ComponentDefaults] = {
    ComponentType.BATTERY: ComponentDefaults(value=9.0, label="9V Battery", unit="volt"),
    ComponentType.RESISTOR: ComponentDefaults(value=220.0, label="Resistor", unit="ohm"),
    ComponentType.LED: ComponentDefaults(value=2.0, label="Red LED", unit=None),
    ComponentType.WIRE: ComponentDefaults(value=0.0, label="Wire", unit=None),
    ComponentType.SWITCH: ComponentDefaults(value=0.0, label="Switch", unit=None, starts_open=True),
    ComponentType.POTENTIOMETER: ComponentDefaults(value=500.0, label="Potentiometer", unit="ohm"),
}

#: Types whose `value` feeds the lumped resistance sum.
RESISTIVE_TYPES = frozenset({ComponentType.RESISTOR, ComponentType.POTENTIOMETER})


@dataclass(frozen=True)
class Component:
    """A placed part together with the electrical state of the latest solve pass."""
    instance_id: str
    component_type: ComponentType
    position: Position
    value: float = 0.0
    label: str = ""
    rotation: float = 0.0
    is_open: bool = False

    # Computed by the solver.
    current: float = 0.0
    voltage_drop: float = 0.0
    power: float = 0.0
    is_active: bool = False
    is_burned_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serializes to the camelCase record the renderer and tutorial UI consume."""
        return {
            "id": self.instance_id,
            "type": self.component_type.value,
            "pos": asdict(self.position),
            "rotation": self.rotation,
            "value": self.value,
            "label": self.label,
            "current": self.current,
            "voltageDrop": self.voltage_drop,
            "power": self.power,
            "isActive": self.is_active,
            "isBurnedOut": self.is_burned_out,
            "isOpen": self.is_open,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Component:
        """
        Builds a component from a camelCase record. Optional flags default to False,
        so records that never carried `isBurnedOut` or `isOpen` are accepted.
        """
        pos = data["pos"]
        return cls(
            instance_id=str(data["id"]),
            component_type=ComponentType(data["type"]),
            position=Position(float(pos["x"]), float(pos["y"])),
            value=float(data.get("value", 0.0)),
            label=str(data.get("label", "")),
            rotation=float(data.get("rotation", 0.0)),
            is_open=bool(data.get("isOpen", False)),
            current=float(data.get("current", 0.0)),
            voltage_drop=float(data.get("voltageDrop", 0.0)),
            power=float(data.get("power", 0.0)),
            is_active=bool(data.get("isActive", False)),
            is_burned_out=bool(data.get("isBurnedOut", False)),
        )


def create_component(
    instance_id: str,
    component_type: ComponentType,
    position: Position,
    value: Optional[float] = None,
    label: Optional[str] = None,
    is_open: Optional[bool] = None,
) -> Component:
    """Creates a fresh, unsolved component, filling anything unspecified from the type defaults."""
    defaults = COMPONENT_DEFAULTS[component_type]
    component = Component(
        instance_id=instance_id,
        component_type=component_type,
        position=position,
        value=defaults.value if value is None else float(value),
        label=defaults.label if label is None else label,
        is_open=defaults.starts_open if is_open is None else bool(is_open),
    )
    logger.debug(f"Created {component_type} '{instance_id}' at ({position.x}, {position.y}).")
    return component
