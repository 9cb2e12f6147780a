"""Gemini model binding."""

from .core import GeminiChatModel
from .adapter import GeminiAdapter

__all__ = ["GeminiChatModel", "GeminiAdapter"]
