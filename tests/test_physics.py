# tests/test_physics.py
import pytest

from circuitlab_core import SolverConfig
from circuitlab_core.analysis import ClusterStatus, PhysicsEngine
from tests.conftest import by_id, make_component


class TestEnergizedGate:

    def test_battery_alone_is_idle(self):
        result = PhysicsEngine().solve_cluster([make_component("B1", "BATTERY", value=9)])
        assert result.status is ClusterStatus.IDLE
        assert not result.updated_components[0].is_active

    def test_cluster_without_battery_is_idle(self):
        members = [make_component("R1", "RESISTOR"), make_component("L1", "LED", 3, 0)]
        result = PhysicsEngine().solve_cluster(members)
        assert result.status is ClusterStatus.IDLE
        assert all(c.current == 0 and not c.is_active for c in result.updated_components)

    def test_open_switch_breaks_cluster(self):
        members = [
            make_component("B1", "BATTERY", value=9),
            make_component("R1", "RESISTOR", 2, 0, value=100),
            make_component("S1", "SWITCH", 4, 0, is_open=True),
        ]
        result = PhysicsEngine().solve_cluster(members)
        assert result.status is ClusterStatus.SWITCH_OPEN
        for comp in result.updated_components:
            assert (comp.current, comp.voltage_drop, comp.power, comp.is_active) == (0.0, 0.0, 0.0, False)

    def test_open_switch_without_battery_is_idle(self):
        members = [make_component("R1", "RESISTOR"), make_component("S1", "SWITCH", 2, 0, is_open=True)]
        assert PhysicsEngine().solve_cluster(members).status is ClusterStatus.IDLE

    def test_de_energizing_clears_stale_fields_but_keeps_burnout(self):
        stale = make_component(
            "L1", "LED", current=0.6, voltage_drop=2.1, power=1.26, is_active=True, is_burned_out=True
        )
        result = PhysicsEngine().solve_cluster([stale])
        led = result.updated_components[0]
        assert (led.current, led.voltage_drop, led.power, led.is_active) == (0.0, 0.0, 0.0, False)
        assert led.is_burned_out is True

    def test_co_located_battery_and_resistor_are_energized(self):
        members = [make_component("B1", "BATTERY", 1, 1, value=9), make_component("R1", "RESISTOR", 1, 1)]
        assert PhysicsEngine().solve_cluster(members).status is ClusterStatus.ENERGIZED


class TestNominalBranch:

    def test_ohms_law(self, ohm_board):
        result = PhysicsEngine().solve_cluster(ohm_board)
        comps = by_id(result.updated_components)
        assert result.status is ClusterStatus.ENERGIZED
        assert result.total_voltage == pytest.approx(9)
        assert result.total_resistance == pytest.approx(1000)
        assert result.current == pytest.approx(0.009)
        assert comps["R1"].voltage_drop == pytest.approx(9)
        assert comps["B1"].voltage_drop == pytest.approx(-9)
        assert comps["R1"].power == pytest.approx(0.081)
        assert comps["B1"].power == pytest.approx(0.081)
        assert all(c.is_active and c.current == pytest.approx(0.009) for c in comps.values())

    def test_lumped_resistance_sums_resistors_potentiometers_and_leds(self):
        members = [
            make_component("B1", "BATTERY", value=10),
            make_component("R1", "RESISTOR", value=100),
            make_component("P1", "POTENTIOMETER", value=60),
            make_component("L1", "LED"),
            make_component("L2", "LED"),
            make_component("W1", "WIRE"),
        ]
        result = PhysicsEngine().solve_cluster(members)
        assert result.total_resistance == pytest.approx(200)
        assert result.current == pytest.approx(0.05)

    def test_batteries_add_up(self):
        members = [
            make_component("B1", "BATTERY", value=9),
            make_component("B2", "BATTERY", value=3),
            make_component("R1", "RESISTOR", value=1200),
        ]
        result = PhysicsEngine().solve_cluster(members)
        assert result.total_voltage == pytest.approx(12)
        assert result.current == pytest.approx(0.01)

    def test_led_drop_is_capped_by_source_voltage(self):
        members = [
            make_component("B1", "BATTERY", value=1.5),
            make_component("R1", "RESISTOR", value=980),
            make_component("L1", "LED"),
        ]
        led = by_id(PhysicsEngine().solve_cluster(members).updated_components)["L1"]
        assert led.voltage_drop == pytest.approx(1.5)
        assert led.power == pytest.approx(led.current * 1.5)

    def test_led_drop_is_forward_voltage(self):
        members = [
            make_component("B1", "BATTERY", value=9),
            make_component("R1", "RESISTOR", value=330),
            make_component("L1", "LED"),
        ]
        result = PhysicsEngine().solve_cluster(members)
        led = by_id(result.updated_components)["L1"]
        assert led.voltage_drop == pytest.approx(2.1)
        assert led.is_active and not led.is_burned_out
        assert not result.overloaded

    def test_zero_value_components_draw_no_power(self):
        members = [
            make_component("B1", "BATTERY", value=9),
            make_component("R1", "RESISTOR", value=100),
            make_component("W1", "WIRE"),
            make_component("S1", "SWITCH", is_open=False),
        ]
        comps = by_id(PhysicsEngine().solve_cluster(members).updated_components)
        for cid in ("W1", "S1"):
            assert comps[cid].is_active
            assert comps[cid].voltage_drop == 0.0
            assert comps[cid].power == 0.0
            assert comps[cid].current == pytest.approx(0.09)


class TestShortCircuit:

    def test_wire_only_cluster_is_shorted(self, short_board):
        result = PhysicsEngine().solve_cluster(short_board)
        assert result.status is ClusterStatus.SHORT_CIRCUIT
        assert result.total_resistance == pytest.approx(0.1)
        for comp in result.updated_components:
            assert comp.current == 5.0
            assert comp.voltage_drop == 0.0
            assert comp.power == 0.0
            assert comp.is_active

    def test_half_ohm_resistor_still_shorts(self):
        members = [make_component("B1", "BATTERY", value=9), make_component("R1", "RESISTOR", value=0.5)]
        assert PhysicsEngine().solve_cluster(members).status is ClusterStatus.SHORT_CIRCUIT

    def test_one_ohm_is_not_a_short(self):
        members = [make_component("B1", "BATTERY", value=1), make_component("R1", "RESISTOR", value=1)]
        result = PhysicsEngine().solve_cluster(members)
        assert result.status is ClusterStatus.ENERGIZED
        assert result.current == pytest.approx(1.0)

    def test_short_current_is_configurable(self, short_board):
        engine = PhysicsEngine(SolverConfig(short_circuit_current=10.0))
        assert all(c.current == 10.0 for c in engine.solve_cluster(short_board).updated_components)

    def test_zero_total_resistance_shorts_even_without_threshold(self, short_board):
        config = SolverConfig(min_total_resistance=0.0, short_circuit_threshold=0.0)
        result = PhysicsEngine(config).solve_cluster(short_board)
        assert result.status is ClusterStatus.SHORT_CIRCUIT
        assert result.total_resistance == 0.0
        assert all(c.current == 5.0 and c.is_active for c in result.updated_components)

    def test_zero_threshold_leaves_real_resistance_nominal(self):
        config = SolverConfig(short_circuit_threshold=0.0)
        members = [make_component("B1", "BATTERY", value=1), make_component("R1", "RESISTOR", value=0.5)]
        result = PhysicsEngine(config).solve_cluster(members)
        assert result.status is ClusterStatus.ENERGIZED
        assert result.current == pytest.approx(2.0)


class TestBurnout:

    def test_overcurrent_burns_led(self, led_board):
        result = PhysicsEngine().solve_cluster(led_board)
        comps = by_id(result.updated_components)
        assert result.status is ClusterStatus.ENERGIZED
        assert result.total_resistance == pytest.approx(20)
        assert result.current == pytest.approx(0.6)
        assert result.overloaded
        led = comps["L1"]
        assert led.is_burned_out
        assert not led.is_active
        assert led.current == 0.0 and led.power == 0.0
        # The rest of the cluster still carries the lumped current.
        assert comps["B1"].is_active
        assert comps["B1"].current == pytest.approx(0.6)

    def test_current_at_threshold_does_not_burn(self):
        # 6 V / 20 ohm = 0.3 A, not strictly above the limit
        members = [make_component("B1", "BATTERY", value=6), make_component("L1", "LED")]
        result = PhysicsEngine().solve_cluster(members)
        assert not result.overloaded
        assert not by_id(result.updated_components)["L1"].is_burned_out

    def test_burnout_is_sticky(self):
        members = [
            make_component("B1", "BATTERY", value=12),
            make_component("L1", "LED", is_burned_out=True),
            make_component("R1", "RESISTOR", value=1000),
        ]
        result = PhysicsEngine().solve_cluster(members)
        led = by_id(result.updated_components)["L1"]
        assert led.is_burned_out
        assert not led.is_active
        # Already burned: no new overload in this pass.
        assert not result.overloaded

    def test_burned_led_still_counts_toward_resistance(self):
        members = [
            make_component("B1", "BATTERY", value=10),
            make_component("R1", "RESISTOR", value=80),
            make_component("L1", "LED", is_burned_out=True),
        ]
        assert PhysicsEngine().solve_cluster(members).total_resistance == pytest.approx(100)


def test_solve_cluster_does_not_mutate_members(led_board):
    before = list(led_board)
    PhysicsEngine().solve_cluster(led_board)
    assert led_board == before
    assert not led_board[1].is_burned_out
