# src/circuitlab_core/labs/exceptions.py
"""
Defines the diagnosable exceptions of the lab preset loader.

`ParsingError` covers file-level and YAML syntax problems, `SchemaValidationError`
covers structural problems found by the Cerberus schema, and `LabDefinitionError`
covers well-formed files whose content still makes no sense (a value with the wrong
unit, an unknown trigger kind).
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseLabParsingError(DiagnosableError):
    """A local, concrete base class for all lab loading errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Lab Loading Error",
            details=str(self),
            suggestion="Please check the format and content of the lab YAML file.",
            context={}
        )


@dataclass()
class ParsingError(BaseLabParsingError):
    """The lab file is missing, unreadable, or not valid YAML."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass()
class SchemaValidationError(BaseLabParsingError):
    """The YAML is valid but does not match the lab schema."""
    errors: Dict[str, Any]
    file_path: Path

    def _error_lines(self):
        return [f"  - Field '{key}': {value}" for key, value in sorted(self.errors.items(), key=lambda kv: str(kv[0]))]

    def __str__(self):
        return f"Lab schema validation failed for file '{self.file_path}':\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the lab file does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Lab Schema Validation Error",
            details=details,
            suggestion="Correct the listed fields. Every lab needs an id, a title and at least one component; component types must be one of BATTERY, RESISTOR, LED, WIRE, SWITCH, POTENTIOMETER.",
            context={'source_file': self.file_path}
        )


@dataclass()
class LabDefinitionError(BaseLabParsingError):
    """The lab file is well-formed but describes something invalid."""
    lab_id: str
    details: str

    def __str__(self):
        return f"Invalid definition in lab '{self.lab_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Lab Definition Error",
            details=self.details,
            suggestion="Check component values carry units matching their type (volts for batteries, ohms for resistors and potentiometers) and that triggers use a known kind.",
            context={'lab_id': self.lab_id}
        )
