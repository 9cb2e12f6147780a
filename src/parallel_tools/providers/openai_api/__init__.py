"""Expose the OpenAI model binding."""

from .core import OpenAIChatModel
from .adapter import OpenAIAdapter

__all__ = ["OpenAIChatModel", "OpenAIAdapter"]
