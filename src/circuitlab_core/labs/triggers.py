# src/circuitlab_core/labs/triggers.py
"""
Tutorial step triggers expressed as data.

A trigger is a small tagged condition evaluated against the board after each solve
pass. Lab files describe them as mappings with a `kind` key, for example:

    {kind: component_match, type: LED, active: true, burned_out: false}

`build_trigger` turns such a mapping into one of the condition classes below.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..components import Component, ComponentType
from .exceptions import LabDefinitionError

logger = logging.getLogger(__name__)


class TriggerCondition(ABC):
    """A boolean predicate over the solved board."""

    @abstractmethod
    def evaluate(self, components: Sequence[Component]) -> bool:
        raise NotImplementedError

    def __call__(self, components: Sequence[Component]) -> bool:
        return self.evaluate(components)


@dataclass(frozen=True)
class AnyActive(TriggerCondition):
    """True when current flows through at least one component."""

    def evaluate(self, components: Sequence[Component]) -> bool:
        return any(c.is_active for c in components)


@dataclass(frozen=True)
class CountAtLeast(TriggerCondition):
    """True when the board holds at least `minimum` components of `component_type`."""
    component_type: ComponentType
    minimum: int = 1

    def evaluate(self, components: Sequence[Component]) -> bool:
        return sum(1 for c in components if c.component_type is self.component_type) >= self.minimum


@dataclass(frozen=True)
class ComponentMatch(TriggerCondition):
    """
    True when some component of `component_type` satisfies every given filter.
    Filters left as None are not checked. `max_value` is exclusive, `min_value`
    is inclusive.
    """
    component_type: ComponentType
    active: Optional[bool] = None
    burned_out: Optional[bool] = None
    max_value: Optional[float] = None
    min_value: Optional[float] = None

    def _matches(self, comp: Component) -> bool:
        if comp.component_type is not self.component_type:
            return False
        if self.active is not None and comp.is_active != self.active:
            return False
        if self.burned_out is not None and comp.is_burned_out != self.burned_out:
            return False
        if self.max_value is not None and not comp.value < self.max_value:
            return False
        if self.min_value is not None and not comp.value >= self.min_value:
            return False
        return True

    def evaluate(self, components: Sequence[Component]) -> bool:
        return any(self._matches(c) for c in components)


@dataclass(frozen=True)
class AllOf(TriggerCondition):
    """True when every nested condition holds."""
    conditions: Tuple[TriggerCondition, ...]

    def evaluate(self, components: Sequence[Component]) -> bool:
        return all(cond.evaluate(components) for cond in self.conditions)


def _component_type(raw: Dict[str, Any], lab_id: str) -> ComponentType:
    try:
        return ComponentType(str(raw["type"]).upper())
    except KeyError:
        raise LabDefinitionError(lab_id=lab_id, details=f"Trigger of kind '{raw.get('kind')}' requires a 'type'.") from None
    except ValueError:
        raise LabDefinitionError(lab_id=lab_id, details=f"Trigger names unknown component type '{raw['type']}'.") from None


def _optional(raw: Dict[str, Any], key: str, cast):
    value = raw.get(key)
    return None if value is None else cast(value)


def build_trigger(raw: Dict[str, Any], lab_id: str = "") -> TriggerCondition:
    """
    Builds a trigger condition from its mapping form.

    Raises:
        LabDefinitionError: The kind is unknown or a required field is missing.
    """
    kind = raw.get("kind")
    if kind == "any_active":
        return AnyActive()
    if kind == "count_at_least":
        return CountAtLeast(component_type=_component_type(raw, lab_id), minimum=int(raw.get("min", 1)))
    if kind == "component_match":
        return ComponentMatch(
            component_type=_component_type(raw, lab_id),
            active=_optional(raw, "active", bool),
            burned_out=_optional(raw, "burned_out", bool),
            max_value=_optional(raw, "max_value", float),
            min_value=_optional(raw, "min_value", float),
        )
    if kind == "all_of":
        nested = raw.get("conditions") or []
        if not nested:
            raise LabDefinitionError(lab_id=lab_id, details="Trigger 'all_of' needs a non-empty 'conditions' list.")
        return AllOf(conditions=tuple(build_trigger(item, lab_id) for item in nested))

    raise LabDefinitionError(lab_id=lab_id, details=f"Unknown trigger kind '{kind}'.")
