"""Prompt construction for the tool-calling protocol."""

import json
from typing import List, Sequence

from ..messages import BaseMessage, DeveloperMessage, SystemMessage
from ..tools.call_protocol import tool_call_example
from ..tools.models import ToolSchema

TOOL_PROTOCOL_TEMPLATE = (
    "I also provide some tools for you to choose from. If you want to call a tool, "
    "please include the following JSON format in your response: {example}\n\n"
    "IMPORTANT: After you have completed the task by calling all necessary tools, you MUST return "
    "a final response WITHOUT any tool_calls. Simply provide a summary or confirmation message to "
    "indicate completion. Do NOT continue calling tools after the task is done."
)

TOOL_RESULT_TEMPLATE = "Tool {name} returned: {output}"


def tool_protocol_instructions() -> str:
    """Developer note teaching the model the exact tool call JSON shape."""
    return TOOL_PROTOCOL_TEMPLATE.format(example=json.dumps(tool_call_example()))


def build_tool_messages(schemas: Sequence[ToolSchema]) -> List[BaseMessage]:
    """Build the protocol note followed by one schema message per tool.

    Returns an empty list when there are no tools, so tool-less agents get no
    tool instructions at all.
    """
    if not schemas:
        return []
    messages: List[BaseMessage] = [DeveloperMessage(content=tool_protocol_instructions())]
    messages.extend(SystemMessage(content=schema.to_prompt()) for schema in schemas)
    return messages


def format_tool_result(name: str, output: str) -> str:
    return TOOL_RESULT_TEMPLATE.format(name=name, output=output)
