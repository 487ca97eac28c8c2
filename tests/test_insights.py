# tests/test_insights.py
import pytest

from circuitlab_core import InsightPolicy, SolverConfig, solve
from circuitlab_core.analysis import ClusterAnalysisResults, ClusterStatus, InsightCode, InsightReporter, cluster_insight
from circuitlab_core.analysis.insights import _format_milliamps, _format_volts
from tests.conftest import make_component

ACTIVE_9V_9MA = "Active Circuit: 9V source, 9mA flow."


def _result(status, **kwargs):
    return ClusterAnalysisResults(member_ids=["x"], status=status, updated_components=[], **kwargs)


def _active_cluster(offset_x=0.0):
    return [
        make_component(f"B{offset_x}", "BATTERY", offset_x, 0, value=9),
        make_component(f"R{offset_x}", "RESISTOR", offset_x + 3, 0, value=1000),
    ]


def _short_cluster(offset_x=0.0):
    return [
        make_component(f"SB{offset_x}", "BATTERY", offset_x, 0, value=9),
        make_component(f"SW{offset_x}", "WIRE", offset_x + 2, 0),
    ]


def _open_switch_cluster(offset_x=0.0):
    return [
        make_component(f"OB{offset_x}", "BATTERY", offset_x, 0, value=9),
        make_component(f"OR{offset_x}", "RESISTOR", offset_x + 2, 0),
        make_component(f"OS{offset_x}", "SWITCH", offset_x + 4, 0),
    ]


class TestMessages:

    @pytest.mark.parametrize("volts, expected", [(9.0, "9"), (12, "12"), (4.5, "4.5"), (0.0, "0")])
    def test_format_volts(self, volts, expected):
        assert _format_volts(volts) == expected

    def test_active_message_rounds_milliamps(self):
        code, message = cluster_insight(_result(ClusterStatus.ENERGIZED, total_voltage=9.0, current=0.040909))
        assert code is InsightCode.ACTIVE_CIRCUIT
        assert message == "Active Circuit: 9V source, 41mA flow."

    @pytest.mark.parametrize("amps, expected", [
        (0.0125, "13"), (0.0025, "3"), (0.0005, "1"), (0.0124, "12"), (0.0, "0"), (5.0, "5000"),
    ])
    def test_milliamps_halves_round_up(self, amps, expected):
        assert _format_milliamps(amps) == expected
        _, message = cluster_insight(_result(ClusterStatus.ENERGIZED, total_voltage=5.0, current=amps))
        assert message == f"Active Circuit: 5V source, {expected}mA flow."

    def test_overload_replaces_nominal_message(self):
        code, message = cluster_insight(_result(ClusterStatus.ENERGIZED, total_voltage=12.0, current=0.6, overloaded=True))
        assert code is InsightCode.LED_OVERLOAD
        assert "OVERLOAD" in message

    def test_idle_cluster_contributes_nothing(self):
        assert cluster_insight(_result(ClusterStatus.IDLE)) is None

    def test_switch_open_and_short_messages(self):
        assert cluster_insight(_result(ClusterStatus.SWITCH_OPEN))[1] == (
            "Switch is OPEN. Close it to complete the circuit path."
        )
        assert "SHORT CIRCUIT" in cluster_insight(_result(ClusterStatus.SHORT_CIRCUIT))[1]

    def test_reporter_falls_back_to_idle(self):
        reporter = InsightReporter()
        reporter.record(_result(ClusterStatus.IDLE))
        assert reporter.selected_code is InsightCode.IDLE
        assert reporter.report() == "Place a battery near other components to start."

    def test_empty_board_message(self):
        assert InsightReporter.empty_board() == "Place components to begin."


class TestFirstMatchPolicy:

    def test_first_cluster_wins_over_later_short(self):
        result = solve(_active_cluster(0) + _short_cluster(100))
        assert result.insights == ACTIVE_9V_9MA

    def test_open_switch_is_not_overridden_by_later_short(self):
        result = solve(_open_switch_cluster(0) + _short_cluster(100))
        assert result.insights.startswith("Switch is OPEN")
        # The short still computes, and makes the board complete.
        assert result.is_complete

    def test_board_order_decides(self):
        result = solve(_short_cluster(0) + _active_cluster(100))
        assert "SHORT CIRCUIT" in result.insights

    def test_idle_clusters_are_skipped(self):
        lone = [make_component("lone", "RESISTOR", -100, 0)]
        assert solve(lone + _active_cluster(0)).insights == ACTIVE_9V_9MA


class TestBySeverityPolicy:

    @pytest.fixture
    def config(self):
        return SolverConfig(insight_policy=InsightPolicy.BY_SEVERITY)

    def test_later_short_wins(self, config):
        result = solve(_active_cluster(0) + _open_switch_cluster(50) + _short_cluster(100), config)
        assert "SHORT CIRCUIT" in result.insights

    def test_overload_outranks_open_switch(self, config):
        led = [make_component("B", "BATTERY", 200, 0, value=12), make_component("L", "LED", 203, 0)]
        result = solve(_open_switch_cluster(0) + led, config)
        assert "OVERLOAD" in result.insights

    def test_equal_rank_keeps_first(self, config):
        second = [
            make_component("B2", "BATTERY", 100, 0, value=4.5),
            make_component("R2", "RESISTOR", 103, 0, value=100),
        ]
        assert solve(_active_cluster(0) + second, config).insights == ACTIVE_9V_9MA

    def test_nothing_to_report(self, config):
        assert solve([make_component("R", "RESISTOR")], config).insights == (
            "Place a battery near other components to start."
        )
