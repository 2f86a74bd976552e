"""Agent orchestrator, its configuration and result model."""

from .agent import Agent
from .config import AgentConfig
from .models import AgentResult
from .prompts import build_tool_messages, tool_protocol_instructions

__all__ = ["Agent", "AgentConfig", "AgentResult", "build_tool_messages", "tool_protocol_instructions"]
