# src/circuitlab_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when a board fails validation.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class BoardValidationError(DiagnosableError):
    """
    Raised when board validation finds one or more error-level issues.
    Warnings and info messages are dropped; only errors are reported.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = "BoardValidationError was raised with no error-level issues."
        else:
            summary_message = (
                f"Board validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        details = (
            f"The board is not in a state the workbench can accept.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue and first_issue.component_id:
            context['component_id'] = first_issue.component_id

        return format_diagnostic_report(
            error_type="Board Validation Error",
            details=details,
            suggestion="Remove duplicate or surplus components and give every battery, resistor and potentiometer a finite, non-negative value.",
            context=context
        )
