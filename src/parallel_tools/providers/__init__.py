"""Collect concrete model bindings."""

from .gemini import GeminiChatModel
from .openai_api import OpenAIChatModel

__all__ = [
    "GeminiChatModel",
    "OpenAIChatModel",
]
