"""Demo tools with simulated backend latency."""

from typing import List, Callable

from ..core.tools import ToolRegistry
from .calculator import calculator, evaluate_expression
from .database import database, MOCK_DATABASE
from .latency import SIMULATED_LATENCY
from .weather import weather

BUILTIN_TOOLS: List[Callable] = [weather, calculator, database]


def register_builtin_tools(registry: ToolRegistry) -> ToolRegistry:
    """Register the weather, calculator and database tools."""
    return registry.register_tools(BUILTIN_TOOLS)


__all__ = [
    "BUILTIN_TOOLS",
    "SIMULATED_LATENCY",
    "MOCK_DATABASE",
    "calculator",
    "database",
    "evaluate_expression",
    "register_builtin_tools",
    "weather",
]
