"""Runtime configuration for host processes.

Values are read from the environment, optionally seeded from a ``.env`` file.
Every variable is prefixed with ``PARALLEL_TOOLS_`` except the provider API keys,
which use the names the provider SDKs already look for.
"""

from typing import Literal, Optional

from dotenv import find_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logger import get_logger

logger = get_logger(__name__)


class Settings(BaseSettings):
    """Settings for wiring the orchestrator, its agents and the model binding.

    Optional limits such as ``PARALLEL_TOOLS_TOOL_TIMEOUT`` are cleared with the value ``none``.

    Attributes:
        provider: Which model binding to use.
        openai_api_key: API key for OpenAI (``OPENAI_API_KEY``).
        openai_base_url: Optional OpenAI-compatible endpoint (``OPENAI_BASE_URL``).
        google_api_key: API key for Gemini (``GOOGLE_API_KEY`` or ``GEMINI_API_KEY``).
        model_name: Model used by the generalist agent.
        specialist_model_name: Model used by specialist agents. Defaults to ``model_name``.
        temperature: Sampling temperature of the generalist agent.
        specialist_temperature: Sampling temperature of the specialists.
        max_tokens: Maximum tokens per model response.
        tool_timeout: Per-invocation tool timeout in seconds. ``None`` disables it.
        max_concurrency: Maximum number of concurrently running tools. ``None`` is unbounded.
        max_tool_rounds: Rounds of tool use per agent run.
        max_retries: Retries for failed model requests.
        log_level: Level passed to ``setup_logging``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARALLEL_TOOLS_",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    provider: Literal["openai", "gemini"] = "openai"
    openai_api_key: Optional[str] = Field(default=None, validation_alias=AliasChoices("OPENAI_API_KEY"))
    openai_base_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("OPENAI_BASE_URL"))
    google_api_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY")
    )
    model_name: str = "gpt-4o"
    specialist_model_name: Optional[str] = None
    temperature: float = 0.1
    specialist_temperature: float = 0.2
    max_tokens: int = 3000
    tool_timeout: Optional[float] = Field(default=180.0, gt=0)
    max_concurrency: Optional[int] = Field(default=None, ge=1)
    max_tool_rounds: int = Field(default=1, ge=1)
    max_retries: int = Field(default=3, ge=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def api_key(self) -> Optional[str]:
        """API key of the selected provider."""
        return self.openai_api_key if self.provider == "openai" else self.google_api_key

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from environment variables.

        Variables set in the environment take precedence over the ``.env`` file.

        Args:
            env_file: Path to a ``.env`` file. If None, the nearest ``.env`` is used when present.

        Returns:
            The parsed settings.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        dotenv_path = env_file or find_dotenv(usecwd=True) or None
        if dotenv_path:
            logger.debug(f"Loading environment from {dotenv_path}")
        return cls(_env_file=dotenv_path)
