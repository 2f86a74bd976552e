"""Provider-agnostic message models for the agent conversation log."""

from abc import ABC
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class MessageRole(str, Enum):
    """Roles a conversational turn can carry."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL_RESULT = "tool_result"
    DEVELOPER = "developer"


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with an LLM.

    Messages are frozen once constructed; the agent only ever appends new ones.

    Attributes:
        role: Role associated with the message.
        content: Text payload of the message.
        name: Originating tool name, set for tool result turns.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str
    name: Optional[str] = None


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    role: MessageRole = MessageRole.SYSTEM


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    role: MessageRole = MessageRole.USER


class AssistantMessage(BaseMessage):
    """Message authored by the assistant. Holds the raw model text, tool call JSON included."""

    role: MessageRole = MessageRole.ASSISTANT


class ToolResultMessage(BaseMessage):
    """Message carrying the output of a tool invocation back to the model."""

    role: MessageRole = MessageRole.TOOL_RESULT
    name: str


class DeveloperMessage(BaseMessage):
    """Instructional turn describing the tool-call protocol to the model."""

    role: MessageRole = MessageRole.DEVELOPER
