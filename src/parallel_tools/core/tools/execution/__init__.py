"""Concurrent batch execution of tool calls."""

from .dispatcher import BatchDispatcher

__all__ = ["BatchDispatcher"]
