import pytest
from unittest.mock import MagicMock
from typing import Any

from google.genai import types

from mini_agent_lib import GenericGemini, ToolCallRequest
from mini_agent_lib.agent_core.messages import (
    AssistantMessage,
    DeveloperMessage,
    SystemMessage,
    ToolResultMessage,
    UserMessage,
)


def make_response(text: str, with_usage: bool = True) -> Any:
    mock_response = MagicMock()
    mock_response.text = text
    if with_usage:
        mock_response.usage_metadata = MagicMock(
            candidates_token_count=10,
            prompt_token_count=5,
            total_token_count=15,
        )
    else:
        mock_response.usage_metadata = None
    return mock_response


def test_initialization(genai_client: Any) -> None:
    gemini = GenericGemini(aclient=genai_client, model_name="gemini-flash-latest")
    assert gemini.model == "gemini-flash-latest"
    assert gemini.client == genai_client


@pytest.mark.asyncio
async def test_generate(genai_client: Any) -> None:
    genai_client.models.generate_content.return_value = make_response(
        '{"tool_calls":[{"name":"get_weather","args":{"city":"Beijing"}}]}'
    )
    gemini = GenericGemini(aclient=genai_client, model_name="gemini-flash-latest", temp=0.3, max_tokens=50)

    result = await gemini.generate(
        [
            SystemMessage(content="You are a helper."),
            DeveloperMessage(content="Use tools."),
            UserMessage(content="Weather in Beijing?"),
        ]
    )

    assert result.tool_calls == [ToolCallRequest(name="get_weather", arguments={"city": "Beijing"})]
    assert result.tokens.prompt_tokens == 5
    assert result.tokens.completion_tokens == 10
    assert result.tokens.total_tokens == 15

    kwargs = genai_client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-flash-latest"
    config = kwargs["config"]
    assert isinstance(config, types.GenerateContentConfig)
    assert config.system_instruction == "You are a helper.\n\nUse tools."
    assert config.temperature == 0.3
    assert config.max_output_tokens == 50
    assert [c.role for c in kwargs["contents"]] == ["user"]


@pytest.mark.asyncio
async def test_generate_without_usage(genai_client: Any) -> None:
    genai_client.models.generate_content.return_value = make_response("Plain answer", with_usage=False)
    gemini = GenericGemini(aclient=genai_client, model_name="gemini-flash-latest")

    result = await gemini.generate([UserMessage(content="Hi")])

    assert result.text == "Plain answer"
    assert result.tool_calls == []
    assert result.tokens.total_tokens == 0


def test_convert_history() -> None:
    system_instruction, contents = GenericGemini._convert_history(
        [
            UserMessage(content="Hi"),
            AssistantMessage(content="Calling a tool"),
            ToolResultMessage(content="Tool x returned: 1", name="x"),
        ]
    )
    assert system_instruction is None
    assert [c.role for c in contents] == ["user", "model", "user"]
    assert contents[2].parts[0].text == "Tool x returned: 1"
