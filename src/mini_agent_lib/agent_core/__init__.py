"""Public exports for the core agent abstractions and utilities."""

from .agent import Agent, AgentConfig, AgentResult
from .base import GenerationPort, GenericLLM, GenerationResult, TokenUsage
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
from .logger import get_logger, setup_logging
from .messages import (
    MessageRole,
    BaseMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolResultMessage,
    DeveloperMessage,
)
from .tools import (
    ToolArgument,
    ToolSchema,
    ToolDefinition,
    ToolCallRequest,
    ToolCallExtractor,
    extract_tool_calls,
    ToolRegistry,
    SchemaValidator,
)

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentResult",
    "GenerationPort",
    "GenericLLM",
    "GenerationResult",
    "TokenUsage",
    "AgentError",
    "ConfigError",
    "ToolRegistrationError",
    "ToolValidationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolParamsMismatchError",
    "LLMExecutionError",
    "MaxIterationsExceededError",
    "get_logger",
    "setup_logging",
    "MessageRole",
    "BaseMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolResultMessage",
    "DeveloperMessage",
    "ToolArgument",
    "ToolSchema",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallExtractor",
    "extract_tool_calls",
    "ToolRegistry",
    "SchemaValidator",
]
