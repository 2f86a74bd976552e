"""Expose provider-agnostic message model types shared by the agent and its backends."""

from .models import (
    MessageRole,
    BaseMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolResultMessage,
    DeveloperMessage,
)

__all__ = [
    "MessageRole",
    "BaseMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolResultMessage",
    "DeveloperMessage",
]
