"""Wires the orchestrator, its tools and its agents from ``Settings``."""

from typing import Any, Optional

from google import genai
from openai import AsyncOpenAI

from .agents import AgentRegistry, GeneralistAgent
from .builtin_tools import register_builtin_tools
from .core.base import ChatModel
from .core.config import Settings
from .core.exceptions import OrchestratorError
from .core.logger import get_logger
from .core.tools import ToolRegistry
from .providers import GeminiChatModel, OpenAIChatModel

logger = get_logger(__name__)


def build_model(
    settings: Settings, model_name: Optional[str] = None, temperature: Optional[float] = None
) -> ChatModel[Any]:
    """Create the model binding selected by ``settings.provider``.

    Args:
        settings: The runtime settings.
        model_name: Overrides ``settings.model_name``.
        temperature: Overrides ``settings.temperature``.

    Raises:
        OrchestratorError: If no API key is configured for the provider.
    """
    if not settings.api_key:
        raise OrchestratorError(f"No API key configured for provider '{settings.provider}'.")

    name = model_name or settings.model_name
    temp = settings.temperature if temperature is None else temperature

    if settings.provider == "gemini":
        client = genai.Client(api_key=settings.google_api_key)
        return GeminiChatModel(
            aclient=client.aio,
            model_name=name,
            temp=temp,
            max_tokens=settings.max_tokens,
            max_retries=settings.max_retries,
        )

    openai_client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    return OpenAIChatModel(
        client=openai_client,
        model_name=name,
        temp=temp,
        max_tokens=settings.max_tokens,
        max_retries=settings.max_retries,
    )


def build_agent(
    settings: Settings,
    model: Optional[ChatModel[Any]] = None,
    specialist_model: Optional[ChatModel[Any]] = None,
) -> GeneralistAgent:
    """Build a generalist agent with the demo tools and specialists registered.

    All registration happens here, before the agent runs its first batch.

    Args:
        settings: The runtime settings.
        model: Model for the generalist. Built from ``settings`` if omitted.
        specialist_model: Model shared by the specialists. Built from ``settings`` if omitted.

    Returns:
        A ready-to-run GeneralistAgent.
    """
    model = model or build_model(settings)
    specialist_model = specialist_model or build_model(
        settings,
        model_name=settings.specialist_model_name,
        temperature=settings.specialist_temperature,
    )

    registry = ToolRegistry(tool_timeout=settings.tool_timeout, max_concurrency=settings.max_concurrency)
    register_builtin_tools(registry)

    agents = AgentRegistry().register_default_specialists(specialist_model)
    registry.register(agents.create_talk_to_agent_tool())

    logger.info(
        f"Built generalist agent with {len(registry.tools)} tools and {len(agents.agents)} specialists "
        f"(provider={settings.provider})"
    )
    return GeneralistAgent(model=model, registry=registry, max_tool_rounds=settings.max_tool_rounds)
