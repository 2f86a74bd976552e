"""Normalized generation output shared by all backends."""

from typing import Any, List

from pydantic import BaseModel, Field

from ..tools.call_protocol import ToolCallRequest


class TokenUsage(BaseModel):
    """
    Token counts reported for one or more model calls.

    Attributes:
        prompt_tokens: The number of tokens in the prompt.
        completion_tokens: The number of tokens in the completion response.
        total_tokens: The total number of tokens used.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


class GenerationResult(BaseModel):
    """
    One model turn as seen by the agent loop.

    Attributes:
        text: Raw text returned by the model.
        tokens: Token usage of this call, zeroed if the backend reports none.
        tool_calls: Tool calls extracted from ``text``, in emission order.
        raw: Provider-specific response payload for advanced use cases.
    """

    text: str
    tokens: TokenUsage = Field(default_factory=TokenUsage)
    tool_calls: List[ToolCallRequest] = Field(default_factory=list)
    raw: Any = None
