from datetime import datetime
from typing import Any, Callable

import pytest

from parallel_tools.agents import (
    SPECIALIST_PROMPTS,
    TALK_TO_AGENT_TOOL_NAME,
    AgentRegistry,
    Specialist,
    SpecialistReply,
)
from parallel_tools.core.base import ModelTurn
from parallel_tools.core.exceptions import AgentNotFoundError, AgentRegistrationError
from parallel_tools.core.messages import SystemMessage, UserMessage
from parallel_tools.core.tools import ToolRegistry


@pytest.mark.asyncio
async def test_specialist_is_stateless(scripted_model: Callable[..., Any]) -> None:
    model = scripted_model(ModelTurn(content="Bring an umbrella."), ModelTurn(content="Sunglasses."))
    specialist = Specialist(name="weather", domain="weather", model=model)

    first = await specialist.run("Rain in London")
    second = await specialist.run("Sun in Rome")

    assert isinstance(first, SpecialistReply)
    assert first.name == "weather"
    assert first.domain == "weather"
    assert first.response == "Bring an umbrella."
    assert isinstance(first.timestamp, datetime)
    assert second.response == "Sunglasses."

    for messages, tools in model.requests:
        assert len(messages) == 2
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == SPECIALIST_PROMPTS["weather"]
        assert isinstance(messages[1], UserMessage)
        assert tools is None
    assert model.requests[1][0][1].content == "Sun in Rome"


def test_specialist_prompt_for_unknown_domain(scripted_model: Callable[..., Any]) -> None:
    specialist = Specialist(name="legal", domain="legal", model=scripted_model())
    assert "legal Specialist" in specialist.system_prompt

    custom = Specialist(name="legal", domain="legal", model=scripted_model(), system_prompt="Be brief.")
    assert custom.system_prompt == "Be brief."


def test_register_and_lookup(scripted_model: Callable[..., Any]) -> None:
    registry = AgentRegistry().register_default_specialists(scripted_model())

    assert registry.agent_names == ["weather", "math", "database"]
    assert registry.get_agent("math").domain == "math"


def test_unknown_agent_lists_available_agents(scripted_model: Callable[..., Any]) -> None:
    registry = AgentRegistry().register_default_specialists(scripted_model())

    with pytest.raises(AgentNotFoundError, match="Agent 'legal' not found. Available agents: weather, math, database"):
        registry.get_agent("legal")


def test_duplicate_and_empty_agent_names(scripted_model: Callable[..., Any]) -> None:
    registry = AgentRegistry()
    specialist = Specialist(name="math", domain="math", model=scripted_model())
    registry.register_agent("math", specialist)

    with pytest.raises(AgentRegistrationError, match="already registered"):
        registry.register_agent("math", specialist)
    with pytest.raises(AgentRegistrationError):
        registry.register_agent("", specialist)


def test_talk_to_agent_tool_definition(scripted_model: Callable[..., Any]) -> None:
    agents = AgentRegistry().register_default_specialists(scripted_model())
    tool = agents.create_talk_to_agent_tool()

    assert tool.name == TALK_TO_AGENT_TOOL_NAME
    assert "weather, math, database" in tool.description
    assert tool.parameters["properties"]["agent_name"]["enum"] == ["weather", "math", "database"]
    assert tool.parameters["required"] == ["agent_name", "message"]


@pytest.mark.asyncio
async def test_talk_to_agent_runs_through_the_batch(scripted_model: Callable[..., Any]) -> None:
    specialist_model = scripted_model(ModelTurn(content="13992 is 583 times 24."))
    agents = AgentRegistry().register_default_specialists(specialist_model)
    tools = ToolRegistry()
    tools.register(agents.create_talk_to_agent_tool())

    known, unknown, invalid = await tools.run_batch(
        [
            {"id": "c1", "name": "talk_to_agent", "args": {"agent_name": "math", "message": "Explain 583 * 24"}},
            {"id": "c2", "name": "talk_to_agent", "args": {"agent_name": "legal", "message": "Is this legal?"}},
            {"id": "c3", "name": "talk_to_agent", "args": {"agent_name": "math"}},
        ]
    )

    assert known.ok
    assert known.value["name"] == "math"
    assert known.value["response"] == "13992 is 583 times 24."
    assert isinstance(known.value["timestamp"], str)

    assert not unknown.ok
    assert "Agent 'legal' not found" in unknown.error  # type: ignore[operator]

    assert not invalid.ok
    assert invalid.error.startswith("Argument validation failed for tool 'talk_to_agent'")  # type: ignore[union-attr]
