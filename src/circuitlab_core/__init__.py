# src/circuitlab_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("CircuitLab Core package initialized.")

from .units import ureg, pint, Quantity, VOLTAGE_DIMENSIONALITY, RESISTANCE_DIMENSIONALITY, CURRENT_DIMENSIONALITY
from .components import ComponentType, Component, Position, COMPONENT_DEFAULTS, create_component
from .config import SolverConfig, InsightPolicy, ConfigParsingError, parse_solver_config, load_solver_config
from .simulation import SolveResult, solve
from .analysis import connection_segments
from .labs import Lab, TutorialStep, load_lab, load_builtin_labs
from .workbench import Workbench, BoardStats, snap_to_grid
from .errors import CircuitLabError, LabLoadError, BoardEditError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Canonical dimensionalities
    "VOLTAGE_DIMENSIONALITY", "RESISTANCE_DIMENSIONALITY", "CURRENT_DIMENSIONALITY",
    # Board Model
    "ComponentType", "Component", "Position", "COMPONENT_DEFAULTS", "create_component",
    # Configuration
    "SolverConfig", "InsightPolicy", "ConfigParsingError", "parse_solver_config", "load_solver_config",
    # Solver
    "SolveResult", "solve", "connection_segments",
    # Labs
    "Lab", "TutorialStep", "load_lab", "load_builtin_labs",
    # Workbench
    "Workbench", "BoardStats", "snap_to_grid",
    # Top-Level Errors (Actionable Diagnostics)
    "CircuitLabError", "LabLoadError", "BoardEditError",
]
