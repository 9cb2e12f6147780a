"""Registry of specialist agents and the meta tool that lets the generalist call them."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, create_model

from ..core.base import ChatModel
from ..core.exceptions import AgentNotFoundError, AgentRegistrationError
from ..core.logger import get_logger
from ..core.tools.models import ToolDefinition
from .prompts import SPECIALIST_PROMPTS
from .specialist import Specialist

logger = get_logger(__name__)

TALK_TO_AGENT_TOOL_NAME = "talk_to_agent"


class AgentRegistry:
    """
    Holds named specialists for the lifetime of the process.

    Specialists are registered at startup and looked up by name afterwards.
    """

    def __init__(self) -> None:
        self.agents: Dict[str, Specialist] = {}

    def register_agent(self, name: str, agent: Specialist) -> "AgentRegistry":
        """Register a specialist under a name.

        Args:
            name: The name the generalist uses to address the specialist.
            agent: The specialist instance.

        Returns:
            The registry itself, for chaining.

        Raises:
            AgentRegistrationError: If the name is empty or already taken.
        """
        if not name:
            raise AgentRegistrationError("Agent must have a name.")
        if name in self.agents:
            msg = f"Agent '{name}' is already registered."
            logger.error(msg)
            raise AgentRegistrationError(msg)

        self.agents[name] = agent
        logger.info(f"Registered agent: '{name}'")
        return self

    def register_default_specialists(self, model: ChatModel[Any]) -> "AgentRegistry":
        """Register the built-in weather, math and database specialists."""
        for domain in SPECIALIST_PROMPTS:
            self.register_agent(domain, Specialist(name=domain, domain=domain, model=model))
        logger.info(f"Initialized {len(self.agents)} specialist agents")
        return self

    def get_agent(self, name: str) -> Specialist:
        """Look up a specialist by name.

        Raises:
            AgentNotFoundError: If no specialist is registered under ``name``.
        """
        agent = self.agents.get(name)
        if agent is None:
            raise AgentNotFoundError(f"Agent '{name}' not found. Available agents: {', '.join(self.agent_names)}")
        return agent

    @property
    def agent_names(self) -> List[str]:
        return list(self.agents.keys())

    def create_talk_to_agent_tool(self) -> ToolDefinition:
        """Build a tool through which the generalist can consult a specialist.

        The tool runs through the same concurrent dispatch path as every other tool.
        An unknown agent name raises ``AgentNotFoundError`` inside the tool, which the
        dispatcher reports as a failed result for that call only.

        Returns:
            A ToolDefinition named ``talk_to_agent``.
        """
        agent_names = self.agent_names

        async def talk_to_agent(agent_name: str, message: str) -> Dict[str, Any]:
            agent = self.get_agent(agent_name)
            reply = await agent.run(message)
            return reply.model_dump(mode="json")

        parameters = {
            "type": "object",
            "properties": {
                "agent_name": {
                    "type": "string",
                    "enum": agent_names,
                    "description": "The name of the specialist agent to call",
                },
                "message": {
                    "type": "string",
                    "description": "The message or question to send to the specialist agent",
                },
            },
            "required": ["agent_name", "message"],
            "additionalProperties": False,
        }

        # Only checks presence and types; unknown names are reported by get_agent with the list of agents.
        args_model: type[BaseModel] = create_model(
            "talk_to_agentParams",
            agent_name=(str, Field(description="The name of the specialist agent to call")),
            message=(str, Field(description="The message or question to send to the specialist agent")),
        )

        return ToolDefinition(
            name=TALK_TO_AGENT_TOOL_NAME,
            description=(
                "Call a specialist agent for domain-specific analysis. "
                f"Available agents: {', '.join(agent_names)}"
            ),
            func=talk_to_agent,
            parameters=parameters,
            args_model=args_model,
        )
