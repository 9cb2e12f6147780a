"""Simulated backend latencies of the demo tools, in seconds."""

from typing import Dict

SIMULATED_LATENCY: Dict[str, float] = {
    "weather": 0.2,
    "calculator": 0.05,
    "database": 1.2,
}
