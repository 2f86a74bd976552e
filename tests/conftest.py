import os
from typing import Annotated, Any, Dict, List, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import find_dotenv, load_dotenv
from pydantic import Field

from mini_agent_lib import BaseMessage, GenerationResult, TokenUsage, ToolRegistry, extract_tool_calls

env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)


class ScriptedLLM:
    """Generation port that replays canned model outputs and records every call."""

    def __init__(self, outputs: Sequence[str], tokens: TokenUsage | None = None) -> None:
        self.outputs = list(outputs)
        self.tokens = tokens or TokenUsage(prompt_tokens=3, completion_tokens=2, total_tokens=5)
        self.calls: List[List[BaseMessage]] = []

    async def generate(self, messages: Sequence[BaseMessage]) -> GenerationResult:
        self.calls.append(list(messages))
        # The last output repeats forever so loop bounds can be exercised
        index = min(len(self.calls) - 1, len(self.outputs) - 1)
        text = self.outputs[index]
        return GenerationResult(text=text, tokens=self.tokens, tool_calls=extract_tool_calls(text))


@pytest.fixture
def weather_calls() -> List[Dict[str, Any]]:
    return []


@pytest.fixture
def weather_registry(weather_calls: List[Dict[str, Any]]) -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool
    def get_weather(city: Annotated[str, Field(description="City name, e.g. 'San Francisco'")]) -> str:
        """Get weather for a given city."""
        weather_calls.append({"city": city})
        return f"It's always sunny in {city}!"

    return registry


@pytest.fixture
def openai_client() -> Any:
    client = MagicMock()
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def genai_client() -> Any:
    client = MagicMock()
    client.models = MagicMock()
    client.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def clean_agent_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("MINI_AGENT_"):
            monkeypatch.delenv(key, raising=False)
