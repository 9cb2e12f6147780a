from typing import Any, Iterable, List, Optional, Sequence, cast

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from ...core.base import ChatModel, ModelTurn
from ...core.logger import get_logger
from ...core.messages import BaseMessage
from ...core.tools import ToolDefinition
from .adapter import OpenAIAdapter

logger = get_logger(__name__)


class OpenAIChatModel(ChatModel[ChatCompletion]):
    """
    Model binding for OpenAI chat completion models.

    Tool calls come back in the legacy shape, with ``function.arguments`` as a JSON string.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str = "gpt-4o",
        temp: float = 0.1,
        max_tokens: int = 3000,
        max_retries: int = 3,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the OpenAI model binding.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier for the OpenAI model to use (e.g., 'gpt-4o').
            temp: The temperature for text generation, controlling randomness.
            max_tokens: The maximum number of tokens to generate in the response.
            max_retries: Retries for failed requests.
            base_retry_delay: Initial delay between retries in seconds, doubled after each attempt.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client: AsyncOpenAI = client
        self.model: str = model_name
        self.temperature = temp
        self.max_tokens = max_tokens

    async def _complete_impl(
        self, messages: List[BaseMessage], tools: Optional[Sequence[ToolDefinition]]
    ) -> ModelTurn[ChatCompletion]:
        openai_messages = OpenAIAdapter.convert_history(messages)

        request: dict[str, Any] = {
            "model": self.model,
            "messages": cast(Iterable[Any], openai_messages),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if tools:
            request["tools"] = OpenAIAdapter.to_tool_params(tools)

        logger.debug(f"Sending request to OpenAI model '{self.model}' with {len(openai_messages)} message(s).")
        response: ChatCompletion = await self.client.chat.completions.create(**request)

        if not response.choices:
            logger.warning("OpenAI response contained no choices.")
            return ModelTurn(content="", tool_calls=[], raw=response)

        return ModelTurn(
            content=response.choices[0].message.content or "",
            tool_calls=OpenAIAdapter.extract_tool_calls(response),
            raw=response,
        )
