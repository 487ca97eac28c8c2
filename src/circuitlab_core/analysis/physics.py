# src/circuitlab_core/analysis/physics.py
"""
Classifies one cluster and computes the electrical state of its members with the
lumped-series model: every resistive element of the cluster is summed into a single
resistance and one scalar current is shared by all members.

There is no exception path. Missing batteries, open switches, zero resistance and
lone components all fall into a defined branch of the model.
"""
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..components import Component, ComponentType, RESISTIVE_TYPES
from ..config import SolverConfig
from .results import ClusterAnalysisResults, ClusterStatus

logger = logging.getLogger(__name__)


class PhysicsEngine:
    """
    Solves clusters one at a time. Stateless apart from its configuration; the
    components passed in are never mutated, updated copies are returned instead.
    """
    def __init__(self, config: Optional[SolverConfig] = None):
        self.config: SolverConfig = config or SolverConfig()

    def solve_cluster(self, members: Sequence[Component]) -> ClusterAnalysisResults:
        """
        Decides whether the cluster is energized and computes every member's fields.

        Args:
            members: The components of one cluster, in cluster order.

        Returns:
            A ClusterAnalysisResults carrying the cluster status and updated copies
            of the members, in the same order.
        """
        member_ids = [c.instance_id for c in members]
        has_battery = any(c.component_type is ComponentType.BATTERY for c in members)
        switch_open = any(c.component_type is ComponentType.SWITCH and c.is_open for c in members)

        if not (has_battery and len(members) >= 2 and not switch_open):
            status = ClusterStatus.SWITCH_OPEN if has_battery and switch_open else ClusterStatus.IDLE
            return ClusterAnalysisResults(
                member_ids=member_ids,
                status=status,
                updated_components=[self._de_energize(c) for c in members],
            )

        total_voltage = sum(c.value for c in members if c.component_type is ComponentType.BATTERY)
        total_resistance = self._total_resistance(members)

        # A zero total resistance is a short whatever the configured threshold.
        if total_resistance <= 0 or total_resistance < self.config.short_circuit_threshold:
            logger.debug(f"Short circuit in cluster {member_ids}: R_total={total_resistance} ohm.")
            return ClusterAnalysisResults(
                member_ids=member_ids,
                status=ClusterStatus.SHORT_CIRCUIT,
                updated_components=[self._saturate(c) for c in members],
                total_voltage=total_voltage,
                total_resistance=total_resistance,
                current=self.config.short_circuit_current,
            )

        current = total_voltage / total_resistance
        updated: List[Component] = []
        overloaded = False
        for comp in members:
            new_comp, burned_now = self._apply_nominal(comp, current, total_voltage)
            overloaded = overloaded or burned_now
            updated.append(new_comp)

        logger.debug(
            f"Cluster {member_ids} energized: V={total_voltage} V, R={total_resistance} ohm, I={current:.6g} A."
        )
        return ClusterAnalysisResults(
            member_ids=member_ids,
            status=ClusterStatus.ENERGIZED,
            updated_components=updated,
            total_voltage=total_voltage,
            total_resistance=total_resistance,
            current=current,
            overloaded=overloaded,
        )

    def _total_resistance(self, members: Sequence[Component]) -> float:
        resistive = sum(c.value for c in members if c.component_type in RESISTIVE_TYPES)
        led_count = sum(1 for c in members if c.component_type is ComponentType.LED)
        return max(self.config.min_total_resistance, resistive + led_count * self.config.led_internal_resistance)

    @staticmethod
    def _de_energize(comp: Component) -> Component:
        # is_burned_out carries over unchanged.
        return replace(comp, current=0.0, voltage_drop=0.0, power=0.0, is_active=False)

    def _saturate(self, comp: Component) -> Component:
        return replace(comp, current=self.config.short_circuit_current, voltage_drop=0.0, power=0.0, is_active=True)

    def _apply_nominal(self, comp: Component, current: float, total_voltage: float):
        """Returns the updated component and whether an LED overload happened on it."""
        burned = comp.is_burned_out
        burned_now = False
        voltage_drop = 0.0

        if comp.component_type in RESISTIVE_TYPES:
            voltage_drop = current * comp.value
        elif comp.component_type is ComponentType.BATTERY:
            voltage_drop = -comp.value
        elif comp.component_type is ComponentType.LED:
            voltage_drop = min(self.config.led_forward_voltage, total_voltage)
            if current > self.config.led_burnout_current:
                burned = True
                burned_now = True
                logger.info(f"LED '{comp.instance_id}' burned out at {current * 1000:.0f} mA.")

        if burned:
            # A burned LED no longer conducts.
            return replace(
                comp, current=0.0, voltage_drop=voltage_drop, power=0.0, is_active=False, is_burned_out=True
            ), burned_now

        return replace(
            comp,
            current=current,
            voltage_drop=voltage_drop,
            power=current * abs(voltage_drop),
            is_active=True,
        ), burned_now
