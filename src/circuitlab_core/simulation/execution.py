# src/circuitlab_core/simulation/execution.py
"""
Provides the single public solve operation.

`solve` is a Facade over the three analysis services: it builds the proximity
topology, solves every cluster with the physics engine, feeds each outcome to the
insight reporter and reassembles the board in its original order. It is a pure
function of its input: no I/O, no shared state, no suspension points. Callers treat
its output as the new truth and discard the list they passed in.
"""
import logging
from typing import Dict, Optional, Sequence

from ..analysis import InsightReporter, PhysicsEngine, TopologyBuilder
from ..analysis.results import ClusterAnalysisResults
from ..components import Component
from ..config import SolverConfig
from .results import SolveResult

logger = logging.getLogger(__name__)


def solve(components: Sequence[Component], config: Optional[SolverConfig] = None) -> SolveResult:
    """
    Recomputes the electrical state of the whole board.

    Args:
        components: The current board. Components are not mutated.
        config: Optional solver constants. Defaults to `SolverConfig()`.

    Returns:
        A SolveResult whose `updated_components` has the same ids in the same order
        as `components`. Every input, including an empty list, yields a result;
        this function does not raise for board content.
    """
    config = config or SolverConfig()
    components = list(components)

    if not components:
        return SolveResult(updated_components=[], insights=InsightReporter.empty_board(), is_complete=False)

    topology = TopologyBuilder(config).analyze(components)
    engine = PhysicsEngine(config)
    reporter = InsightReporter(config.insight_policy)

    by_id: Dict[str, Component] = {c.instance_id: c for c in components}
    cluster_results = []
    for cluster_ids in topology.clusters:
        result: ClusterAnalysisResults = engine.solve_cluster([by_id[i] for i in cluster_ids])
        cluster_results.append(result)
        reporter.record(result)
        by_id.update((c.instance_id, c) for c in result.updated_components)

    updated = [by_id[c.instance_id] for c in components]
    insights = reporter.report()
    is_complete = any(c.is_active for c in updated)
    logger.debug(
        f"Solve pass over {len(updated)} component(s) in {len(cluster_results)} cluster(s): "
        f"{reporter.selected_code.code}, complete={is_complete}."
    )
    return SolveResult(
        updated_components=updated,
        insights=insights,
        is_complete=is_complete,
        topology=topology,
        cluster_results=cluster_results,
    )
