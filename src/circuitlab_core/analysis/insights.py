# src/circuitlab_core/analysis/insights.py
"""
Derives the single board-wide status message of a solve pass.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional, Tuple

from ..config import InsightPolicy
from .results import ClusterAnalysisResults, ClusterStatus

logger = logging.getLogger(__name__)


class InsightCode(Enum):
    """
    Registry of board status messages.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """
    EMPTY_BOARD = ("EMPTY_BOARD", "Place components to begin.")
    SWITCH_OPEN = ("SWITCH_OPEN", "Switch is OPEN. Close it to complete the circuit path.")
    SHORT_CIRCUIT = ("SHORT_CIRCUIT", "⚠️ SHORT CIRCUIT! Very high current detected. Add resistance to protect the source.")
    LED_OVERLOAD = ("LED_OVERLOAD", "💥 OVERLOAD: The LED burned out due to excessive current!")
    ACTIVE_CIRCUIT = ("ACTIVE_CIRCUIT", "Active Circuit: {voltage}V source, {milliamps}mA flow.")
    IDLE = ("IDLE", "Place a battery near other components to start.")

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
            logger.error(f"Missing key {e} for formatting message template of {self.name}: '{self.template}'. Provided args: {kwargs}")
            return self.template


# Higher rank wins under InsightPolicy.BY_SEVERITY.
_SEVERITY_RANK = {
    InsightCode.SHORT_CIRCUIT: 4,
    InsightCode.LED_OVERLOAD: 3,
    InsightCode.SWITCH_OPEN: 2,
    InsightCode.ACTIVE_CIRCUIT: 1,
}


def _format_volts(volts: float) -> str:
    """Whole numbers print without a decimal part: 9.0 -> '9', 4.5 -> '4.5'."""
    volts = float(volts)
    return str(int(volts)) if volts.is_integer() else str(volts)


def _format_milliamps(amps: float) -> str:
    """Whole milliamps, exact halves rounding up: 0.0125 A -> '13'."""
    return str(Decimal(amps * 1000).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cluster_insight(result: ClusterAnalysisResults) -> Optional[Tuple[InsightCode, str]]:
    """Returns the message a single cluster contributes, or None for an idle cluster."""
    if result.status is ClusterStatus.SWITCH_OPEN:
        return InsightCode.SWITCH_OPEN, InsightCode.SWITCH_OPEN.format_message()
    if result.status is ClusterStatus.SHORT_CIRCUIT:
        return InsightCode.SHORT_CIRCUIT, InsightCode.SHORT_CIRCUIT.format_message()
    if result.status is ClusterStatus.ENERGIZED:
        if result.overloaded:
            return InsightCode.LED_OVERLOAD, InsightCode.LED_OVERLOAD.format_message()
        message = InsightCode.ACTIVE_CIRCUIT.format_message(
            voltage=_format_volts(result.total_voltage),
            milliamps=_format_milliamps(result.current),
        )
        return InsightCode.ACTIVE_CIRCUIT, message
    return None


class InsightReporter:
    """
    Collects cluster results in enumeration order and selects the board message.

    Under FIRST_MATCH the first cluster to contribute a message keeps it; later
    clusters never override it, whatever their severity. Under BY_SEVERITY the most
    severe contribution wins, ties going to the earlier cluster.
    """
    def __init__(self, policy: InsightPolicy = InsightPolicy.FIRST_MATCH):
        self.policy = policy
        self._candidates: List[Tuple[InsightCode, str]] = []

    def record(self, result: ClusterAnalysisResults) -> None:
        insight = cluster_insight(result)
        if insight is not None:
            self._candidates.append(insight)

    @property
    def selected_code(self) -> InsightCode:
        return self._select()[0]

    def report(self) -> str:
        """Returns the board message; never empty."""
        return self._select()[1]

    def _select(self) -> Tuple[InsightCode, str]:
        if not self._candidates:
            return InsightCode.IDLE, InsightCode.IDLE.format_message()
        if self.policy is InsightPolicy.BY_SEVERITY:
            # max() keeps the first of equal-rank candidates.
            return max(self._candidates, key=lambda item: _SEVERITY_RANK[item[0]])
        return self._candidates[0]

    @staticmethod
    def empty_board() -> str:
        return InsightCode.EMPTY_BOARD.format_message()
