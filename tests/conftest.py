# tests/conftest.py
from dataclasses import replace
from pathlib import Path

import pytest
import yaml

from circuitlab_core import SolverConfig, Workbench
from circuitlab_core.components import Component, ComponentType, Position, create_component


# Helper function to create a component at a given spot, with optional overrides
def make_component(
    instance_id: str,
    component_type,
    x: float = 0.0,
    y: float = 0.0,
    value: float = None,
    **overrides
) -> Component:
    """
    Creates a component with the type defaults, then applies any field overrides.
    component_type may be a ComponentType or its name, e.g. "BATTERY".
    Overrides can seed computed fields: make_component("L1", "LED", is_burned_out=True)
    """
    if isinstance(component_type, str):
        component_type = ComponentType(component_type)
    comp = create_component(instance_id, component_type, Position(x, y), value=value)
    return replace(comp, **overrides) if overrides else comp


def by_id(components):
    return {c.instance_id: c for c in components}


@pytest.fixture
def default_config():
    return SolverConfig()


@pytest.fixture
def ohm_board():
    """9 V battery and 1 kohm resistor within reach of each other."""
    return [
        make_component("B1", "BATTERY", 0, 0, value=9),
        make_component("R1", "RESISTOR", 3, 0, value=1000),
    ]


@pytest.fixture
def short_board():
    """9 V battery bridged by a wire only."""
    return [
        make_component("B1", "BATTERY", 0, 0, value=9),
        make_component("W1", "WIRE", 2, 0),
    ]


@pytest.fixture
def led_board():
    """12 V battery driving an LED with no current-limiting resistor."""
    return [
        make_component("B1", "BATTERY", 0, 0, value=12),
        make_component("L1", "LED", 4, 0),
    ]


@pytest.fixture
def workbench():
    return Workbench()


@pytest.fixture
def write_yaml(tmp_path):
    """Returns a function that dumps a mapping to a YAML file under tmp_path."""
    def _write(data, name="lab.yaml") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def minimal_lab_dict():
    return {
        "id": "test-lab",
        "title": "Test Lab",
        "components": [
            {"type": "BATTERY", "position": {"x": 0, "y": 0}, "value": "9 V"},
            {"type": "RESISTOR", "position": {"x": 3, "y": 0}, "value": "1 kohm"},
        ],
    }
