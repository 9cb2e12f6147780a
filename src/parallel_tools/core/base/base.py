"""Provider-independent interface of a model binding."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from ..logger import get_logger
from ..messages import BaseMessage
from ..tools.models import ToolDefinition

logger = get_logger(__name__)


ProviderResT = TypeVar("ProviderResT")


class ModelTurn(BaseModel, Generic[ProviderResT]):
    """What the model answered to one request.

    Attributes:
        content: Text content returned by the model.
        tool_calls: Tool calls requested by the model, in the provider's wire shape.
        raw: Provider-specific response payload for advanced use cases.
    """

    content: str = ""
    tool_calls: List[Any] = Field(default_factory=list)
    raw: Optional[ProviderResT] = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


class ChatModel(ABC, Generic[ProviderResT]):
    """Abstract base class for model bindings.

    Subclasses implement ``_complete_impl`` for a single provider request. ``complete``
    adds retries with exponential backoff on top: after the n-th failed attempt it waits
    ``base_retry_delay * 2**(n-1)`` seconds, and the error of the last attempt propagates.
    """

    def __init__(self, max_retries: int = 3, base_retry_delay: float = 1.0):
        self.max_retries = max_retries
        self.base_retry_delay = base_retry_delay

    async def complete(
        self, messages: List[BaseMessage], tools: Optional[Sequence[ToolDefinition]] = None
    ) -> ModelTurn[ProviderResT]:
        """Send one request to the model.

        Args:
            messages: The conversation so far (provider-agnostic format).
            tools: Tools the model may call in this turn. ``None`` or empty disables tool use.

        Returns:
            The model's answer, including any requested tool calls.
        """
        return await self._with_retries(lambda: self._complete_impl(messages, tools))

    async def _with_retries(
        self, attempt_request: Callable[[], Awaitable[ModelTurn[ProviderResT]]]
    ) -> ModelTurn[ProviderResT]:
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await attempt_request()
            except Exception as e:
                if attempt == attempts:
                    logger.error(f"Model request failed after {attempts} attempt(s): {e}")
                    raise

                delay = self.base_retry_delay * 2 ** (attempt - 1)
                logger.warning(f"API Error (Retry: {attempt}/{self.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)

        raise ValueError(f"max_retries must not be negative, got {self.max_retries}.")

    @abstractmethod
    async def _complete_impl(
        self, messages: List[BaseMessage], tools: Optional[Sequence[ToolDefinition]]
    ) -> ModelTurn[ProviderResT]:
        pass
