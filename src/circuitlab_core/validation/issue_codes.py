# src/circuitlab_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class BoardIssueCode(Enum):
    """
    Registry of board validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Board-Level Issues (BOARD_...) ---
    BOARD_DUPLICATE_ID = ("BOARD_DUPLICATE_ID", "Component id '{component_id}' is used by {count} components.")
    BOARD_CAPACITY = ("BOARD_CAPACITY", "The board holds {count} components, more than the maximum of {max_components}.")

    # --- Component Value Issues (COMP_...) ---
    COMP_VALUE_NEGATIVE = ("COMP_VALUE_NEGATIVE", "Component '{component_id}' ({component_type}) has a negative value {value}.")
    COMP_VALUE_NONFINITE = ("COMP_VALUE_NONFINITE", "Component '{component_id}' ({component_type}) has a non-finite value {value}.")
    COMP_ISOLATED = ("COMP_ISOLATED", "Component '{component_id}' has no neighbour closer than {connection_distance} units.")

    # --- Cluster Issues (CLUSTER_...) ---
    CLUSTER_NO_SOURCE = ("CLUSTER_NO_SOURCE", "Components {member_ids} are connected to each other but not to any battery.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
