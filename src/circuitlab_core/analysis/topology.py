# src/circuitlab_core/analysis/topology.py
"""
Infers board connectivity from component positions and partitions the board into
independently solvable clusters.
"""
import logging
from typing import List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from ..components import Component, Position
from ..config import SolverConfig
from .results import TopologyAnalysisResults

logger = logging.getLogger(__name__)


class TopologyBuilder:
    """
    Builds the proximity graph of a board. Two components are adjacent when the
    Euclidean distance between their positions is strictly below the connection
    distance; orientation, type and polarity play no part.

    The service is stateless and never mutates the components it is given.
    """
    def __init__(self, config: Optional[SolverConfig] = None):
        self.config: SolverConfig = config or SolverConfig()

    def analyze(self, components: Sequence[Component]) -> TopologyAnalysisResults:
        """
        Builds the proximity graph and its cluster partition.

        Args:
            components: The board, in its authoritative order.

        Returns:
            The immutable TopologyAnalysisResults for this board.
        """
        edges = self._find_adjacent_pairs(components)

        graph = nx.Graph()
        # Nodes first, in board order, so neighbour iteration order follows the board.
        graph.add_nodes_from(c.instance_id for c in components)
        graph.add_edges_from(edges)

        clusters = self._partition(components, graph)
        logger.debug(
            f"Topology: {len(components)} component(s), {len(edges)} connection(s), {len(clusters)} cluster(s)."
        )
        return TopologyAnalysisResults(graph=graph, clusters=clusters, edges=edges)

    def _find_adjacent_pairs(self, components: Sequence[Component]) -> List[Tuple[str, str]]:
        """Returns every adjacent (i, j) pair with i < j, in row-major order."""
        if len(components) < 2:
            return []

        coords = np.array([(c.position.x, c.position.y) for c in components], dtype=float)
        deltas = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
        distances = np.hypot(deltas[..., 0], deltas[..., 1])

        # Upper triangle only: adjacency is symmetric and a component is not its own neighbour.
        within_reach = np.triu(distances < self.config.connection_distance, k=1)
        rows, cols = np.nonzero(within_reach)
        return [(components[i].instance_id, components[j].instance_id) for i, j in zip(rows, cols)]

    @staticmethod
    def _partition(components: Sequence[Component], graph: nx.Graph) -> List[List[str]]:
        """Breadth-first traversal from each unvisited component, in board order."""
        visited = set()
        clusters: List[List[str]] = []
        for comp in components:
            start = comp.instance_id
            if start in visited:
                continue
            cluster = [start] + [v for _, v in nx.bfs_edges(graph, start)]
            visited.update(cluster)
            clusters.append(cluster)
        return clusters


def connection_segments(
    components: Sequence[Component], config: Optional[SolverConfig] = None
) -> List[Tuple[Position, Position]]:
    """
    Returns the endpoints of every connection line the renderer should draw.
    Uses the solver's own adjacency, so drawn wires and computed connectivity match.
    """
    by_id = {c.instance_id: c for c in components}
    edges = TopologyBuilder(config)._find_adjacent_pairs(components)
    return [(by_id[a].position, by_id[b].position) for a, b in edges]
