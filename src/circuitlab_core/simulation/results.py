# src/circuitlab_core/simulation/results.py
"""
Defines the public result contract of a solve pass.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..analysis.results import ClusterAnalysisResults, TopologyAnalysisResults
from ..components import Component


@dataclass(frozen=True)
class SolveResult:
    """
    The complete output of one solve pass.

    Attributes:
        updated_components: The board with refreshed computed fields. Same ids,
                            same order and same length as the input list.
        insights: The board-wide status message. Never empty.
        is_complete: True iff at least one returned component is active.
        topology: The proximity graph and cluster partition the pass used.
        cluster_results: Per-cluster outcomes, in cluster enumeration order.
    """
    updated_components: List[Component]
    insights: str
    is_complete: bool
    topology: Optional[TopologyAnalysisResults] = None
    cluster_results: List[ClusterAnalysisResults] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """The camelCase payload handed to the renderer and tutorial UI."""
        return {
            "updatedComponents": [c.to_dict() for c in self.updated_components],
            "insights": self.insights,
            "isComplete": self.is_complete,
        }
