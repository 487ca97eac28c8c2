# src/circuitlab_core/components/__init__.py
from .base_enums import ComponentType
from .component import (
    COMPONENT_DEFAULTS,
    RESISTIVE_TYPES,
    Component,
    ComponentDefaults,
    Position,
    create_component,
)

__all__ = [
    "ComponentType",
    "Component",
    "ComponentDefaults",
    "Position",
    "COMPONENT_DEFAULTS",
    "RESISTIVE_TYPES",
    "create_component",
]
