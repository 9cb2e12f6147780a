"""Specialist agents: stateless, domain-scoped models callable like tools."""

from datetime import datetime, timezone
from typing import Any, Optional

from ..core.base import ChatModel
from ..core.logger import get_logger
from ..core.messages import SystemMessage, UserMessage
from .models import SpecialistReply
from .prompts import default_specialist_prompt

logger = get_logger(__name__)


class Specialist:
    """A secondary agent focused on one domain.

    Every call to ``run`` is an independent model request built from the system
    prompt and the message alone; nothing is remembered between calls.
    """

    def __init__(self, name: str, domain: str, model: ChatModel[Any], system_prompt: Optional[str] = None) -> None:
        """Initialize the specialist.

        Args:
            name: Registry name of the specialist.
            domain: Domain the specialist covers, e.g. 'weather'.
            model: Model binding used for every request.
            system_prompt: Custom system prompt. Defaults to the built-in prompt of the domain.
        """
        self.name = name
        self.domain = domain
        self.model = model
        self.system_prompt = system_prompt or default_specialist_prompt(domain)

    async def run(self, message: str) -> SpecialistReply:
        """Ask the specialist a single question.

        Args:
            message: The question or data forwarded by the generalist.

        Returns:
            The specialist's reply.
        """
        logger.info(f"Running {self.domain} specialist '{self.name}' with input: {message[:80]}")
        turn = await self.model.complete([SystemMessage(content=self.system_prompt), UserMessage(content=message)])
        return SpecialistReply(
            name=self.name,
            domain=self.domain,
            response=turn.content,
            timestamp=datetime.now(timezone.utc),
        )

    def __repr__(self) -> str:
        return f"Specialist(name={self.name!r}, domain={self.domain!r})"
