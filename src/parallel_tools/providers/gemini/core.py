from typing import List, Optional, Sequence

from google.genai import types
from google.genai.client import AsyncClient
from google.genai.types import GenerateContentResponse

from ...core.base import ChatModel, ModelTurn
from ...core.logger import get_logger
from ...core.messages import BaseMessage
from ...core.tools import ToolDefinition
from .adapter import GeminiAdapter

logger = get_logger(__name__)


class GeminiChatModel(ChatModel[GenerateContentResponse]):
    """
    Model binding for Google's Gemini models.

    Function calls come back in the modern shape, with ``args`` already decoded.
    """

    def __init__(
        self,
        aclient: AsyncClient,
        model_name: str = "gemini-2.0-flash",
        temp: float = 0.1,
        max_tokens: int = 3000,
        max_retries: int = 3,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the Gemini model binding.

        Args:
            aclient: The async Google GenAI client (``Client(...).aio``).
            model_name: The identifier for the Gemini model to use.
            temp: The temperature for text generation, controlling randomness.
            max_tokens: The maximum number of tokens to generate in the response.
            max_retries: Retries for failed requests.
            base_retry_delay: Initial delay between retries in seconds, doubled after each attempt.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client: AsyncClient = aclient
        self.model: str = model_name
        self.temperature = temp
        self.max_tokens = max_tokens
        logger.info(f"Initialized GeminiChatModel with model='{model_name}', temp={temp}, max_tokens={max_tokens}")

    async def _complete_impl(
        self, messages: List[BaseMessage], tools: Optional[Sequence[ToolDefinition]]
    ) -> ModelTurn[GenerateContentResponse]:
        config = types.GenerateContentConfig(
            system_instruction=GeminiAdapter.system_instruction(messages),
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            tools=[GeminiAdapter.to_tool(tools)] if tools else None,
        )
        contents = GeminiAdapter.convert_history(messages)

        logger.debug(f"Sending request to Gemini model '{self.model}' with {len(contents)} content(s).")
        response = await self.client.models.generate_content(model=self.model, contents=contents, config=config)

        return ModelTurn(
            content=GeminiAdapter.extract_text(response),
            tool_calls=GeminiAdapter.extract_tool_calls(response),
            raw=response,
        )
