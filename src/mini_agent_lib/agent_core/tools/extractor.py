"""Recover structured tool calls from free-form model output."""

import json
from typing import Any, List, Optional

from .call_protocol import TOOL_ARGS_KEY, TOOL_CALLS_KEY, TOOL_NAME_KEY, ToolCallRequest
from ..logger import get_logger

logger = get_logger(__name__)


class ToolCallExtractor:
    """
    Parses a model's raw text into zero or more tool call requests.

    Models often wrap the JSON payload in prose or code fences. The whole text is
    tried first, then the span between the first ``{`` and the last ``}``.
    Missing or malformed payloads are never an error: the turn simply carries no
    tool calls and is treated as a final answer.
    """

    @classmethod
    def extract(cls, text: str) -> List[ToolCallRequest]:
        """Extract tool calls from raw model text.

        Args:
            text: The raw generation returned by the model.

        Returns:
            The tool calls in the order they appear in the ``tool_calls`` array.
        """
        payload = cls._parse_payload(text)
        if not isinstance(payload, dict):
            return []

        entries = payload.get(TOOL_CALLS_KEY)
        if not isinstance(entries, list):
            return []

        calls: List[ToolCallRequest] = []
        for index, entry in enumerate(entries):
            call = cls._parse_entry(entry)
            if call is None:
                logger.debug(f"Skipping malformed tool call entry at index {index}: {entry!r}")
                continue
            calls.append(call)
        return calls

    @staticmethod
    def _parse_payload(text: str) -> Any:
        """Parse the text as JSON, falling back to the outermost brace span.

        Args:
            text: The raw generation.

        Returns:
            The decoded JSON value, or None if nothing could be decoded.
        """
        if not text:
            return None

        try:
            return json.loads(text)
        except (json.JSONDecodeError, RecursionError):
            pass

        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None

        try:
            return json.loads(text[start : end + 1])
        except (json.JSONDecodeError, RecursionError):
            logger.debug("Generation contains braces but no decodable JSON object.")
            return None

    @staticmethod
    def _parse_entry(entry: Any) -> Optional[ToolCallRequest]:
        if not isinstance(entry, dict):
            return None

        name = entry.get(TOOL_NAME_KEY)
        if not isinstance(name, str):
            return None

        args = entry.get(TOOL_ARGS_KEY)
        if not isinstance(args, dict):
            args = {}

        return ToolCallRequest(name=name, arguments=args)


def extract_tool_calls(text: str) -> List[ToolCallRequest]:
    """Shortcut for ``ToolCallExtractor.extract``."""
    return ToolCallExtractor.extract(text)
