"""Observability graph of agent runs."""

from .generator import GraphGenerator, GraphNode, GraphEdge

__all__ = ["GraphGenerator", "GraphNode", "GraphEdge"]
