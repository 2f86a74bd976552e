"""Mini Agent Library - a bounded tool-calling agent loop over pluggable LLM backends."""

from .agent_core import (
    Agent,
    AgentConfig,
    AgentResult,
    GenerationPort,
    GenericLLM,
    GenerationResult,
    TokenUsage,
    MessageRole,
    BaseMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolResultMessage,
    DeveloperMessage,
    ToolDefinition,
    ToolRegistry,
    ToolCallRequest,
    extract_tool_calls,
    AgentError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolParamsMismatchError,
    LLMExecutionError,
    MaxIterationsExceededError,
    ConfigError,
    ToolRegistrationError,
    ToolValidationError,
    get_logger,
    setup_logging,
)
from .agent_impl import GenericGemini, GenericOllama, GenericOpenAI

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentResult",
    "GenerationPort",
    "GenericLLM",
    "GenerationResult",
    "TokenUsage",
    "MessageRole",
    "BaseMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolResultMessage",
    "DeveloperMessage",
    "ToolDefinition",
    "ToolRegistry",
    "ToolCallRequest",
    "extract_tool_calls",
    "AgentError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolParamsMismatchError",
    "LLMExecutionError",
    "MaxIterationsExceededError",
    "ConfigError",
    "ToolRegistrationError",
    "ToolValidationError",
    "get_logger",
    "setup_logging",
    "GenericGemini",
    "GenericOllama",
    "GenericOpenAI",
]
