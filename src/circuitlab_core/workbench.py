# src/circuitlab_core/workbench.py
"""
The stateful shell around the solver.

A `Workbench` owns the single authoritative component list of a board. Every
topology-affecting edit builds a new list, runs exactly one solve pass over it and
replaces the held list with the solver's output; the pre-solve list is never kept.
Edits that would leave the board invalid are rejected with a `BoardEditError`
before anything is solved, so the held state is untouched.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union
from uuid import uuid4

import pint

from .analysis import InsightReporter
from .analysis.topology import connection_segments
from .components import COMPONENT_DEFAULTS, Component, ComponentType, Position, create_component
from .config import SolverConfig
from .constants import GRID_STEP, MAX_COMPONENTS
from .errors import BoardEditError, format_diagnostic_report
from .labs import Lab, TutorialStep
from .simulation import SolveResult, solve
from .units import to_magnitude
from .validation import BoardValidationError, BoardValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardStats:
    """Headline numbers of the board for the stats panel."""
    voltage: float
    current: float
    resistance: float


def snap_to_grid(value: float) -> float:
    """Rounds to the nearest grid step; exact halves round up (2.25 -> 2.5, -2.25 -> -2.0)."""
    return math.floor(value / GRID_STEP + 0.5) * GRID_STEP


def _new_instance_id() -> str:
    return uuid4().hex[:9]


class Workbench:
    """
    Holds one board, its latest solve outcome and the active lab's tutorial progress.
    """
    def __init__(self, config: Optional[SolverConfig] = None, max_components: int = MAX_COMPONENTS):
        self.config: SolverConfig = config or SolverConfig()
        self.max_components = max_components
        self.components: List[Component] = []
        self.insights: str = InsightReporter.empty_board()
        self.is_complete: bool = False
        self.last_result: Optional[SolveResult] = None
        self.lab: Optional[Lab] = None
        self.tutorial_index: int = 0

    # --- Board edits ---

    def place(self, component_type: Union[ComponentType, str], x: float, y: float) -> Component:
        """Drops a new component with the type defaults at the snapped position and returns it."""
        component_type = ComponentType(component_type.upper() if isinstance(component_type, str) else component_type)
        if len(self.components) >= self.max_components:
            raise BoardEditError(format_diagnostic_report(
                error_type="Board Full",
                details=f"The board already holds {len(self.components)} components; the maximum is {self.max_components}.",
                suggestion="Delete a component before placing a new one.",
                context={}
            ))

        new_comp = create_component(
            instance_id=_new_instance_id(),
            component_type=component_type,
            position=Position(snap_to_grid(x), snap_to_grid(y)),
        )
        self._commit(self.components + [new_comp])
        logger.debug(f"Placed {component_type} '{new_comp.instance_id}'.")
        return self.get(new_comp.instance_id)

    def move(self, instance_id: str, x: float, y: float) -> Component:
        """Moves a component to the snapped position."""
        index = self._index_of(instance_id)
        moved = replace(self.components[index], position=Position(snap_to_grid(x), snap_to_grid(y)))
        self._commit(self._replaced(index, moved))
        return self.get(instance_id)

    def update(
        self,
        instance_id: str,
        value: Optional[Union[float, str]] = None,
        is_open: Optional[bool] = None,
        label: Optional[str] = None,
        rotation: Optional[float] = None,
    ) -> Component:
        """
        Edits the placement fields of one component. `value` may be a bare number in
        the type's base unit or a unit string such as "4.7 kohm".

        Raises:
            BoardEditError: Unknown id, unparsable value, or a value the board
                            validator rejects (negative or non-finite).
        """
        index = self._index_of(instance_id)
        current = self.components[index]
        changes = {}
        if value is not None:
            changes["value"] = self._convert_value(current, value)
        if is_open is not None:
            changes["is_open"] = bool(is_open)
        if label is not None:
            changes["label"] = label
        if rotation is not None:
            changes["rotation"] = float(rotation)
        if not changes:
            return current

        candidate = self._replaced(index, replace(current, **changes))
        self._validate_or_raise(candidate)
        self._commit(candidate)
        return self.get(instance_id)

    def toggle_switch(self, instance_id: str) -> Component:
        index = self._index_of(instance_id)
        comp = self.components[index]
        if comp.component_type is not ComponentType.SWITCH:
            raise BoardEditError(format_diagnostic_report(
                error_type="Not a Switch",
                details=f"Component '{instance_id}' is a {comp.component_type}, only switches can be toggled.",
                suggestion="Select a switch to open or close it.",
                context={'component_id': instance_id}
            ))
        self._commit(self._replaced(index, replace(comp, is_open=not comp.is_open)))
        return self.get(instance_id)

    def delete(self, instance_id: str) -> None:
        index = self._index_of(instance_id)
        self._commit(self.components[:index] + self.components[index + 1:])
        logger.debug(f"Deleted component '{instance_id}'.")

    # --- Labs ---

    def start_lab(self, lab: Lab) -> None:
        """Replaces the board with the lab's starting components and restarts its tutorial."""
        self.lab = lab
        self.tutorial_index = 0
        self._commit(lab.build_components())
        logger.info(f"Started lab '{lab.lab_id}' ({lab.title}).")

    def reset(self) -> None:
        """Reloads the active lab, or clears the board when no lab is active."""
        if self.lab is not None:
            logger.info(f"Resetting lab '{self.lab.lab_id}'.")
            self.start_lab(self.lab)
        else:
            logger.info("Clearing the board.")
            self._commit([])

    @property
    def current_step(self) -> Optional[TutorialStep]:
        if self.lab is None or not self.lab.tutorial_steps:
            return None
        return self.lab.tutorial_steps[self.tutorial_index]

    @property
    def on_last_step(self) -> bool:
        return self.lab is not None and self.tutorial_index == len(self.lab.tutorial_steps) - 1

    def is_goal_met(self) -> bool:
        """Evaluates the current step's trigger on the held board. False without a trigger."""
        step = self.current_step
        return step.is_goal_met(self.components) if step else False

    def advance_tutorial(self) -> Optional[TutorialStep]:
        """Moves to the next step and returns it. The last step stays current once reached."""
        if self.lab is not None and self.lab.tutorial_steps:
            self.tutorial_index = min(len(self.lab.tutorial_steps) - 1, self.tutorial_index + 1)
        return self.current_step

    # --- Read-only views ---

    def get(self, instance_id: str) -> Component:
        return self.components[self._index_of(instance_id)]

    @property
    def stats(self) -> BoardStats:
        """
        Source voltage is the sum of active batteries, current the largest current
        through an active component, and resistance their ratio (0 without current).
        """
        active = [c for c in self.components if c.is_active]
        voltage = sum(c.value for c in active if c.component_type is ComponentType.BATTERY)
        current = max((c.current for c in active), default=0.0)
        resistance = voltage / current if current > 0 else 0.0
        return BoardStats(voltage=voltage, current=current, resistance=resistance)

    def connection_segments(self) -> List[Tuple[Position, Position]]:
        return connection_segments(self.components, self.config)

    # --- Internals ---

    def _commit(self, components: List[Component]) -> None:
        result = solve(components, self.config)
        self.components = result.updated_components
        self.insights = result.insights
        self.is_complete = result.is_complete
        self.last_result = result

    def _replaced(self, index: int, comp: Component) -> List[Component]:
        return self.components[:index] + [comp] + self.components[index + 1:]

    def _index_of(self, instance_id: str) -> int:
        for index, comp in enumerate(self.components):
            if comp.instance_id == instance_id:
                return index
        raise BoardEditError(format_diagnostic_report(
            error_type="Unknown Component",
            details=f"No component with id '{instance_id}' is on the board.",
            suggestion="The component may have been deleted or the lab reset. Refresh the selection.",
            context={'component_id': instance_id}
        ))

    @staticmethod
    def _convert_value(comp: Component, raw: Union[float, str]) -> float:
        unit = COMPONENT_DEFAULTS[comp.component_type].unit or "dimensionless"
        try:
            return to_magnitude(raw, unit)
        except (ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
            raise BoardEditError(format_diagnostic_report(
                error_type="Invalid Component Value",
                details=f"Could not interpret the value for {comp.component_type} '{comp.instance_id}': {e}",
                suggestion=f"Enter a number or a quantity in {unit}.",
                context={'component_id': comp.instance_id, 'user_input': raw}
            )) from e

    def _validate_or_raise(self, candidate: List[Component]) -> None:
        validator = BoardValidator(candidate, self.config, self.max_components)
        issues = validator.validate()
        if validator.has_errors:
            error = BoardValidationError(issues)
            logger.warning(f"Rejected board edit: {error}")
            raise BoardEditError(error.get_diagnostic_report()) from error
