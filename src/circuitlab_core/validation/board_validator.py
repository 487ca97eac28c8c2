# src/circuitlab_core/validation/board_validator.py
import logging
import math
from collections import Counter
from typing import List, Optional, Sequence

from ..analysis.topology import TopologyBuilder
from ..components import COMPONENT_DEFAULTS, Component, ComponentType
from ..config import SolverConfig
from ..constants import MAX_COMPONENTS
from .issue_codes import BoardIssueCode
from .issues import ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)


class BoardValidator:
    """
    Checks a board for states the workbench should refuse or point out.

    The solver itself accepts any board; these checks guard the edit operations
    and the lab loader. Only ERROR-level issues block an edit. WARNING and INFO
    issues describe boards that solve fine but will not light anything up.
    """

    def __init__(
        self,
        components: Sequence[Component],
        config: Optional[SolverConfig] = None,
        max_components: int = MAX_COMPONENTS,
    ):
        self.components = list(components)
        self.config = config or SolverConfig()
        self.max_components = max_components
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found (errors, warnings, and info).
        The caller decides whether error-level issues are fatal.
        """
        self.issues = []
        self._check_capacity()
        self._check_unique_ids()
        self._check_values()
        self._check_connectivity()

        if self.issues:
            errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
            logger.debug(f"Board validation found {len(self.issues)} issue(s), {errors} error(s).")
        return self.issues

    @property
    def has_errors(self) -> bool:
        return any(i.level == ValidationIssueLevel.ERROR for i in self.issues)

    def _add_issue(self, level: ValidationIssueLevel, code_enum: BoardIssueCode, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            component_id=kwargs.get('component_id'), details=kwargs
        ))

    def _check_capacity(self):
        if len(self.components) > self.max_components:
            self._add_issue(
                ValidationIssueLevel.ERROR, BoardIssueCode.BOARD_CAPACITY,
                count=len(self.components), max_components=self.max_components
            )

    def _check_unique_ids(self):
        counts = Counter(c.instance_id for c in self.components)
        for component_id, count in counts.items():
            if count > 1:
                self._add_issue(
                    ValidationIssueLevel.ERROR, BoardIssueCode.BOARD_DUPLICATE_ID,
                    component_id=component_id, count=count
                )

    def _check_values(self):
        for comp in self.components:
            # Only types whose value the solver reads are checked.
            if COMPONENT_DEFAULTS[comp.component_type].unit is None:
                continue
            if not math.isfinite(comp.value):
                self._add_issue(
                    ValidationIssueLevel.ERROR, BoardIssueCode.COMP_VALUE_NONFINITE,
                    component_id=comp.instance_id, component_type=comp.component_type.value, value=comp.value
                )
            elif comp.value < 0:
                self._add_issue(
                    ValidationIssueLevel.ERROR, BoardIssueCode.COMP_VALUE_NEGATIVE,
                    component_id=comp.instance_id, component_type=comp.component_type.value, value=comp.value
                )

    def _check_connectivity(self):
        if not self.components:
            return
        topology = TopologyBuilder(self.config).analyze(self.components)
        types_by_id = {c.instance_id: c.component_type for c in self.components}

        for cluster in topology.clusters:
            if len(cluster) == 1:
                self._add_issue(
                    ValidationIssueLevel.INFO, BoardIssueCode.COMP_ISOLATED,
                    component_id=cluster[0], connection_distance=self.config.connection_distance
                )
            elif not any(types_by_id[i] is ComponentType.BATTERY for i in cluster):
                self._add_issue(
                    ValidationIssueLevel.WARNING, BoardIssueCode.CLUSTER_NO_SOURCE,
                    member_ids=cluster
                )
