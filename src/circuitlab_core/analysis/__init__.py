# src/circuitlab_core/analysis/__init__.py
"""
Public interface of the analysis services: the proximity topology, the per-cluster
physics engine, the board status reporter, and their result contracts.
"""
from .results import ClusterAnalysisResults, ClusterStatus, TopologyAnalysisResults
from .topology import TopologyBuilder, connection_segments
from .physics import PhysicsEngine
from .insights import InsightCode, InsightReporter, cluster_insight

__all__ = [
    # Result Contracts
    "ClusterAnalysisResults",
    "ClusterStatus",
    "TopologyAnalysisResults",
    # Services
    "TopologyBuilder",
    "PhysicsEngine",
    "InsightReporter",
    # Helpers
    "InsightCode",
    "cluster_insight",
    "connection_segments",
]
