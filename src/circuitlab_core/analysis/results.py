# src/circuitlab_core/analysis/results.py
"""
Defines the immutable result contracts of the analysis stages.

The topology stage hands its partition to the physics stage, and the physics stage
hands one record per cluster to the insight reporter. Using frozen dataclasses
instead of loose tuples keeps each hand-off self-describing, and guarantees that a
stage cannot modify what an earlier stage produced.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import networkx as nx

from ..components import Component


class ClusterStatus(Enum):
    """The outcome of classifying and solving one cluster."""
    IDLE = "IDLE"                    # No battery, or a lone component.
    SWITCH_OPEN = "SWITCH_OPEN"      # Battery present, but an open switch breaks the path.
    SHORT_CIRCUIT = "SHORT_CIRCUIT"  # Energized with total resistance below the short threshold.
    ENERGIZED = "ENERGIZED"          # Energized with a finite, nominal current.

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class TopologyAnalysisResults:
    """
    The proximity graph of a board and its partition into clusters.

    Attributes:
        graph: Undirected graph whose nodes are component ids, in board order.
        clusters: Component ids grouped by connectivity. Clusters are listed in the
                  order their first member appears on the board; ids inside a cluster
                  are in breadth-first order from that member.
        edges: Adjacent id pairs in the order they were discovered.
    """
    graph: nx.Graph
    clusters: List[List[str]]
    edges: List[Tuple[str, str]]


@dataclass(frozen=True)
class ClusterAnalysisResults:
    """
    The electrical state of one cluster after a solve pass.

    `total_voltage`, `total_resistance` and `current` are zero unless the cluster
    was energized. `overloaded` is True when at least one LED exceeded its burnout
    current during this pass.
    """
    member_ids: List[str]
    status: ClusterStatus
    updated_components: List[Component]
    total_voltage: float = 0.0
    total_resistance: float = 0.0
    current: float = 0.0
    overloaded: bool = False
