# src/circuitlab_core/labs/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..components import Component, ComponentType, Position, create_component
from .triggers import TriggerCondition

# These classes are the loaded, validated form of a lab YAML file. Values are already
# converted to base units (volts, ohms) by the parser.


@dataclass(frozen=True)
class LabComponentSpec:
    """One component the lab places on the board before the learner starts."""
    component_type: ComponentType
    position: Position
    value: Optional[float] = None
    label: Optional[str] = None
    is_open: Optional[bool] = None


@dataclass(frozen=True)
class TutorialStep:
    """One guided step. Steps without a trigger are advanced manually."""
    title: str
    description: str
    action_label: Optional[str] = None
    trigger: Optional[TriggerCondition] = None

    def is_goal_met(self, components: Sequence[Component]) -> bool:
        return self.trigger.evaluate(components) if self.trigger else False


@dataclass(frozen=True)
class Lab:
    """A guided exercise: a starting board plus tutorial steps."""
    lab_id: str
    title: str
    description: str
    difficulty: str
    icon: str
    objectives: List[str]
    initial_components: List[LabComponentSpec]
    tutorial_steps: List[TutorialStep] = field(default_factory=list)
    source_yaml_path: Optional[Path] = None

    def build_components(self) -> List[Component]:
        """
        Creates the starting board. Ids are `init-<index>`, so restarting the lab
        always produces the same ids; unspecified values and labels take the type
        defaults.
        """
        return [
            create_component(
                instance_id=f"init-{index}",
                component_type=spec.component_type,
                position=spec.position,
                value=spec.value,
                label=spec.label,
                is_open=spec.is_open,
            )
            for index, spec in enumerate(self.initial_components)
        ]
