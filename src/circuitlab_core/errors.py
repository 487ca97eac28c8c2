# src/circuitlab_core/errors.py
"""
Error types shared by every package, and the report layout they are shown in.

Internal failures (a malformed lab file, a board that fails validation) are
`DiagnosableError`s that know how to describe themselves. The facades the shell
calls (`load_lab`, the `Workbench` edits) turn them into one of the user-facing
`CircuitLabError`s, whose message is the finished report.
"""
import logging
from typing import Any, Dict, List, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)


class CircuitLabError(Exception):
    """Base class for the errors the shell is expected to show to the learner."""


class LabLoadError(CircuitLabError):
    """A lab preset could not be loaded. The message is a diagnostic report."""


class BoardEditError(CircuitLabError):
    """An edit was rejected and the board left as it was. The message is a diagnostic report."""


@runtime_checkable
class Diagnosable(Protocol):
    def get_diagnostic_report(self) -> str:
        ...


class DiagnosableError(Exception, Diagnosable):
    """Base of internal errors; each subclass decides how it is reported."""

    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# Context entries shown in the report header, in display order.
_CONTEXT_LABELS = (
    ("component_id", "Component"),
    ("lab_id", "Lab"),
    ("source_file", "Source File"),
    ("user_input", "User Input"),
)
_LABEL_WIDTH = 16
_REPORT_WIDTH = 75


def _header_line(label: str, value: Any) -> str:
    return f"{label + ':':<{_LABEL_WIDTH}}{value}"


def _section(title: str, text: str) -> List[str]:
    return [f"\n{title}:"] + [f"  {line}" for line in text.splitlines()]


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Lays out a report: a title rule, the error type, whichever of component, lab,
    source file and user input the context carries, then the details and the
    suggestion, each indented by two spaces.
    """
    lines = ["\n", " CircuitLab Core: Actionable Diagnostic Report ".center(_REPORT_WIDTH, "=")]
    lines.append(_header_line("Error Type", error_type))
    for key, label in _CONTEXT_LABELS:
        value = context.get(key)
        if value is None or value == "":
            continue
        lines.append(_header_line(label, f"'{value}'" if key == "user_input" else value))

    lines.extend(_section("Details", details))
    if suggestion:
        lines.extend(_section("Suggestion", suggestion))
    lines.append("=" * _REPORT_WIDTH)
    return "\n".join(lines)
