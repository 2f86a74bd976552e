"""Tools package: descriptors, registry, call protocol and extraction."""

from .models import ToolArgument, ToolSchema, ToolDefinition
from .call_protocol import ToolCallRequest, TOOL_CALLS_KEY, TOOL_NAME_KEY, TOOL_ARGS_KEY
from .extractor import ToolCallExtractor, extract_tool_calls
from .registry import ToolRegistry
from .schema import SchemaValidator, ToolParameterFactory

__all__ = [
    "ToolArgument",
    "ToolSchema",
    "ToolDefinition",
    "ToolCallRequest",
    "TOOL_CALLS_KEY",
    "TOOL_NAME_KEY",
    "TOOL_ARGS_KEY",
    "ToolCallExtractor",
    "extract_tool_calls",
    "ToolRegistry",
    "SchemaValidator",
    "ToolParameterFactory",
]
