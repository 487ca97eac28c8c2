# src/circuitlab_core/labs/parser.py
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import pint
import yaml

from ..components import COMPONENT_DEFAULTS, ComponentType, Position
from ..constants import MAX_COMPONENTS
from ..units import to_magnitude
from ..validation import BoardValidationError, BoardValidator
from .exceptions import LabDefinitionError, ParsingError, SchemaValidationError
from .models import Lab, LabComponentSpec, TutorialStep
from .triggers import build_trigger

logger = logging.getLogger(__name__)

# Lab ids are lowercase slugs such as 'ohms-basics'.
LAB_ID_REGEX = r"^[a-z0-9][a-z0-9_-]*$"

COMPONENT_TYPE_NAMES = [t.value for t in ComponentType]
TRIGGER_KINDS = ["any_active", "count_at_least", "component_match", "all_of"]
DIFFICULTIES = ["Beginner", "Intermediate", "Advanced"]


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


class EnhancedValidator(cerberus.Validator):
    """Cerberus validator with the lab id naming rule."""

    def _validate_lab_id_regex(self, constraint: bool, field: str, value: Any):
        """
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and not re.match(LAB_ID_REGEX, value):
            self._error(
                field,
                f"Lab id '{value}' is invalid. Use lowercase letters, digits, '-' and '_', starting with a letter or digit.",
            )


class LabParser:
    """
    Parses and validates lab preset YAML files into `Lab` objects.

    Validation happens in three layers: the Cerberus schema checks structure, the
    parser converts values with units and builds triggers, and the board validator
    checks the resulting starting board.
    """
    _trigger_schema = {
        "kind": {"type": "string", "required": True, "allowed": TRIGGER_KINDS},
        "type": {"type": "string", "coerce": _upper, "allowed": COMPONENT_TYPE_NAMES},
        "min": {"type": "integer", "min": 0},
        "active": {"type": "boolean"},
        "burned_out": {"type": "boolean"},
        "max_value": {"type": "number"},
        "min_value": {"type": "number"},
        "conditions": {"type": "list", "minlength": 1, "schema": {"type": "dict"}},
    }

    _component_schema = {
        "type": {"type": "string", "required": True, "coerce": _upper, "allowed": COMPONENT_TYPE_NAMES},
        "position": {
            "type": "dict", "required": True,
            "schema": {"x": {"type": "number", "required": True}, "y": {"type": "number", "required": True}},
        },
        "value": {"type": ["number", "string"], "required": False},
        "label": {"type": "string", "required": False, "empty": False},
        "is_open": {"type": "boolean", "required": False},
    }

    _step_schema = {
        "title": {"type": "string", "required": True, "empty": False},
        "description": {"type": "string", "required": True},
        "action_label": {"type": "string", "required": False},
        "trigger": {"type": "dict", "required": False, "schema": _trigger_schema},
    }

    _schema = {
        "id": {"type": "string", "required": True, "empty": False, "lab_id_regex": True},
        "title": {"type": "string", "required": True, "empty": False},
        "description": {"type": "string", "default": ""},
        "difficulty": {"type": "string", "allowed": DIFFICULTIES, "default": "Beginner"},
        "icon": {"type": "string", "default": ""},
        "objectives": {"type": "list", "default": [], "schema": {"type": "string"}},
        "components": {
            "type": "list", "required": True, "minlength": 1, "maxlength": MAX_COMPONENTS,
            "schema": {"type": "dict", "schema": _component_schema},
        },
        "tutorial_steps": {"type": "list", "default": [], "schema": {"type": "dict", "schema": _step_schema}},
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("LabParser initialized.")

    def parse(self, yaml_path: Union[str, Path]) -> Lab:
        """Loads, validates and converts one lab file."""
        source = Path(yaml_path).resolve()
        content = self._load_yaml(source)
        return self.parse_dict(content, source)

    def parse_dict(self, content: Dict[str, Any], source: Optional[Path] = None) -> Lab:
        """Validates and converts an already-loaded lab mapping."""
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source)
        data = self._validator.document
        lab_id = data["id"]

        specs = [self._build_component_spec(raw, lab_id, index) for index, raw in enumerate(data["components"])]
        steps = [self._build_step(raw, lab_id) for raw in data["tutorial_steps"]]

        lab = Lab(
            lab_id=lab_id,
            title=data["title"],
            description=data["description"],
            difficulty=data["difficulty"],
            icon=data["icon"],
            objectives=list(data["objectives"]),
            initial_components=specs,
            tutorial_steps=steps,
            source_yaml_path=source,
        )

        validator = BoardValidator(lab.build_components())
        issues = validator.validate()
        if validator.has_errors:
            raise BoardValidationError(issues)

        logger.info(f"Parsed lab '{lab_id}' with {len(specs)} component(s) and {len(steps)} tutorial step(s).")
        return lab

    def _build_component_spec(self, raw: Dict[str, Any], lab_id: str, index: int) -> LabComponentSpec:
        component_type = ComponentType(raw["type"])
        value = None
        if "value" in raw:
            unit = COMPONENT_DEFAULTS[component_type].unit or "dimensionless"
            try:
                value = to_magnitude(raw["value"], unit)
            except (ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
                raise LabDefinitionError(
                    lab_id=lab_id,
                    details=f"Component #{index} ({component_type.value}) has invalid value {raw['value']!r}: {e}",
                ) from e

        return LabComponentSpec(
            component_type=component_type,
            position=Position(float(raw["position"]["x"]), float(raw["position"]["y"])),
            value=value,
            label=raw.get("label"),
            is_open=raw.get("is_open"),
        )

    def _build_step(self, raw: Dict[str, Any], lab_id: str) -> TutorialStep:
        trigger = None
        if raw.get("trigger") is not None:
            try:
                trigger = build_trigger(raw["trigger"], lab_id)
            except (TypeError, ValueError) as e:
                raise LabDefinitionError(lab_id=lab_id, details=f"Step '{raw['title']}' has a malformed trigger: {e}") from e
        return TutorialStep(
            title=raw["title"],
            description=raw["description"],
            action_label=raw.get("action_label"),
            trigger=trigger,
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Lab file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e

        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
