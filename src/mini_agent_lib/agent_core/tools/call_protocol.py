"""Data models and wire keys of the tool-call JSON convention.

The same keys are used to instruct the model and to parse its output back, so
the prompt template and the extractor cannot drift apart::

    {"tool_calls": [{"name": "<tool name>", "args": {...}}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

TOOL_CALLS_KEY = "tool_calls"
TOOL_NAME_KEY = "name"
TOOL_ARGS_KEY = "args"


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request extracted from a model turn."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


def tool_call_example() -> Dict[str, Any]:
    """Example payload embedded in the tool protocol instructions."""
    return {
        TOOL_CALLS_KEY: [
            {
                TOOL_NAME_KEY: "tool_name",
                TOOL_ARGS_KEY: {"param1": "value1", "param2": "value2"},
            }
        ]
    }
