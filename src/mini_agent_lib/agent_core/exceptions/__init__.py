"""Export the agent exception hierarchy used across registration, execution and generation paths."""

from .exceptions import (
    AgentError,
    ConfigError,
    ToolRegistrationError,
    ToolValidationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolParamsMismatchError,
    LLMExecutionError,
    MaxIterationsExceededError,
)

__all__ = [
    "AgentError",
    "ConfigError",
    "ToolRegistrationError",
    "ToolValidationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolParamsMismatchError",
    "LLMExecutionError",
    "MaxIterationsExceededError",
]
