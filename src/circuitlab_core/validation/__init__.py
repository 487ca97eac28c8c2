# src/circuitlab_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import BoardIssueCode
from .board_validator import BoardValidator
from .exceptions import BoardValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "BoardIssueCode",
    "BoardValidator",
    "BoardValidationError",
]
