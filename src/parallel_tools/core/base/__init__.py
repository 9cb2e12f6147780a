"""Re-export the model binding interface and its normalized response model."""

from .base import ChatModel, ModelTurn

__all__ = [
    "ChatModel",
    "ModelTurn",
]
