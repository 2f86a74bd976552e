"""Agent configuration."""

import os
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ..exceptions import ConfigError
from ..logger import get_logger

logger = get_logger(__name__)

DEFAULT_ENV_PREFIX = "MINI_AGENT_"


class AgentConfig(BaseModel):
    """
    Settings of the agent decision loop.

    Attributes:
        max_iterations: Maximum number of generation turns before giving up.
        system_prompt: Optional system prompt placed first in every conversation.
        tool_timeout: Timeout in seconds for a single tool invocation.
    """

    max_iterations: int = Field(default=100, ge=1, description="Loop bound on generation turns")
    system_prompt: Optional[str] = Field(default=None, description="Instructions describing the agent's role")
    tool_timeout: float = Field(default=180.0, gt=0, description="Per-tool timeout in seconds")

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ENV_PREFIX, dotenv: bool = True) -> "AgentConfig":
        """Build the configuration from environment variables.

        Reads ``<prefix>MAX_ITERATIONS``, ``<prefix>SYSTEM_PROMPT`` and
        ``<prefix>TOOL_TIMEOUT``. Unset variables keep their defaults.

        Args:
            prefix: Environment variable prefix.
            dotenv: Whether to load a ``.env`` file first (existing variables win).

        Returns:
            The validated configuration.

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        if dotenv:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                logger.debug(f"Loading .env from: {env_file}")
                load_dotenv(env_file)

        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            env_value = os.getenv(f"{prefix}{field_name.upper()}")
            if env_value is not None:
                values[field_name] = env_value
        return cls.build(**values)

    @classmethod
    def build(cls, **values: Any) -> "AgentConfig":
        """Validate raw values into a configuration, raising ConfigError on failure."""
        try:
            return cls(**values)
        except ValidationError as e:
            msg = f"Invalid agent configuration: {e}"
            logger.error(msg)
            raise ConfigError(msg) from e
