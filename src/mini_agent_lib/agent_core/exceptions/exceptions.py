"""
Custom exception classes for the agent orchestration layer.

This module defines the hierarchy of exceptions raised while registering tools,
decoding tool arguments, running tools, calling the language model and driving
the agent loop. Every error that can end a ``call_llm`` run derives from
``AgentError`` so callers can catch the whole family at once.
"""

from typing import Optional


class AgentError(Exception):
    """Base exception for all agent-related errors."""

    pass


class ConfigError(AgentError):
    """Raised when an agent or backend is configured with invalid values."""

    pass


class ToolRegistrationError(AgentError):
    """Raised when there is an error registering a tool."""

    pass


class ToolValidationError(AgentError):
    """Raised when a tool definition or its parameter schema is invalid."""

    pass


class ToolNotFoundError(AgentError):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        self.name = name
        super().__init__(message or f"Tool not found: {name}")


class ToolExecutionError(AgentError):
    """Raised when a tool fails during execution.

    Attributes:
        name: Name of the tool that failed.
        reason: Human-readable failure reason.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Tool execution error in '{name}': {reason}")


class ToolParamsMismatchError(ToolExecutionError):
    """Raised when the model-supplied arguments cannot be decoded into the tool's parameters."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(name, f"Tool parameters do not match: {reason}")


class LLMExecutionError(AgentError):
    """Raised when the generation backend fails (network, decoding, rate limiting)."""

    pass


class MaxIterationsExceededError(AgentError):
    """Raised when the agent loop hits its bound without a final answer."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(f"Maximum iterations exceeded: {max_iterations}")
