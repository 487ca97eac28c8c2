# src/circuitlab_core/labs/__init__.py
"""
Lab presets: guided exercises with a starting board and tutorial steps.
"""
import logging
from pathlib import Path
from typing import Dict, Union

from ..errors import DiagnosableError, LabLoadError
from .exceptions import LabDefinitionError, ParsingError, SchemaValidationError
from .models import Lab, LabComponentSpec, TutorialStep
from .parser import LabParser
from .triggers import AllOf, AnyActive, ComponentMatch, CountAtLeast, TriggerCondition, build_trigger

logger = logging.getLogger(__name__)

PRESETS_DIR = Path(__file__).parent / "presets"


def load_lab(yaml_path: Union[str, Path]) -> Lab:
    """
    Loads one lab file. Any diagnosable failure (file, schema, values, starting
    board) is reported as a single LabLoadError carrying the formatted report.
    """
    try:
        return LabParser().parse(yaml_path)
    except DiagnosableError as e:
        raise LabLoadError(e.get_diagnostic_report()) from e


def load_builtin_labs() -> Dict[str, Lab]:
    """Loads the bundled presets, keyed by lab id, in file name order."""
    parser = LabParser()
    labs: Dict[str, Lab] = {}
    for path in sorted(PRESETS_DIR.glob("*.yaml")):
        try:
            lab = parser.parse(path)
        except DiagnosableError as e:
            raise LabLoadError(e.get_diagnostic_report()) from e
        labs[lab.lab_id] = lab
    logger.info(f"Loaded {len(labs)} built-in lab(s): {list(labs)}")
    return labs


__all__ = [
    # Models
    "Lab",
    "LabComponentSpec",
    "TutorialStep",
    # Triggers
    "TriggerCondition",
    "AnyActive",
    "CountAtLeast",
    "ComponentMatch",
    "AllOf",
    "build_trigger",
    # Parser and Exceptions
    "LabParser",
    "ParsingError",
    "SchemaValidationError",
    "LabDefinitionError",
    # Loaders
    "load_lab",
    "load_builtin_labs",
    "PRESETS_DIR",
]
