# src/circuitlab_core/simulation/__init__.py
from .results import SolveResult
from .execution import solve

__all__ = [
    "SolveResult",
    "solve",
]
