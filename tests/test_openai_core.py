import pytest
from unittest.mock import MagicMock
from typing import Any

from openai.types.chat import ChatCompletion, ChatCompletionMessage
from openai.types.chat.chat_completion import Choice
from openai.types.completion_usage import CompletionUsage

from mini_agent_lib import GenericOpenAI, LLMExecutionError, ToolCallRequest
from mini_agent_lib.agent_core.messages import (
    AssistantMessage,
    DeveloperMessage,
    SystemMessage,
    ToolResultMessage,
    UserMessage,
)


def make_response(content: Any, usage: bool = True) -> Any:
    mock_message = MagicMock(spec=ChatCompletionMessage)
    mock_message.content = content

    mock_choice = MagicMock(spec=Choice)
    mock_choice.message = mock_message

    mock_response = MagicMock(spec=ChatCompletion)
    mock_response.choices = [mock_choice]
    if usage:
        mock_usage = MagicMock(spec=CompletionUsage)
        mock_usage.prompt_tokens = 5
        mock_usage.completion_tokens = 10
        mock_usage.total_tokens = 15
        mock_response.usage = mock_usage
    else:
        mock_response.usage = None
    return mock_response


def test_initialization(openai_client: Any) -> None:
    llm = GenericOpenAI(client=openai_client, model_name="gpt-4o-mini")
    assert llm.model == "gpt-4o-mini"
    assert llm.client == openai_client


@pytest.mark.asyncio
async def test_generate_plain_answer(openai_client: Any) -> None:
    openai_client.chat.completions.create.return_value = make_response("Hello world")
    llm = GenericOpenAI(client=openai_client, model_name="gpt-4o-mini", temp=0.2, max_tokens=100)

    result = await llm.generate([SystemMessage(content="You are a helper."), UserMessage(content="Hello")])

    assert result.text == "Hello world"
    assert result.tool_calls == []
    assert result.tokens.total_tokens == 15

    call_args = openai_client.chat.completions.create.call_args
    assert call_args.kwargs["model"] == "gpt-4o-mini"
    assert call_args.kwargs["temperature"] == 0.2
    assert call_args.kwargs["max_tokens"] == 100
    assert call_args.kwargs["messages"] == [
        {"role": "system", "content": "You are a helper."},
        {"role": "user", "content": "Hello"},
    ]


@pytest.mark.asyncio
async def test_generate_extracts_tool_calls_from_text(openai_client: Any) -> None:
    openai_client.chat.completions.create.return_value = make_response(
        'Let me check. {"tool_calls":[{"name":"get_weather","args":{"city":"Beijing"}}]}', usage=False
    )
    llm = GenericOpenAI(client=openai_client, model_name="gpt-4o-mini")

    result = await llm.generate([UserMessage(content="Weather in Beijing?")])

    assert result.tool_calls == [ToolCallRequest(name="get_weather", arguments={"city": "Beijing"})]
    assert result.tokens.total_tokens == 0


def test_convert_history_collapses_unsupported_roles() -> None:
    history = [
        SystemMessage(content="sys"),
        DeveloperMessage(content="dev"),
        UserMessage(content="user"),
        AssistantMessage(content="assistant"),
        ToolResultMessage(content="Tool x returned: 1", name="x"),
    ]
    converted = GenericOpenAI._convert_history(history)
    assert [m["role"] for m in converted] == ["system", "system", "user", "assistant", "user"]
    assert converted[4]["content"] == "Tool x returned: 1"


@pytest.mark.asyncio
async def test_empty_choices_yield_empty_text(openai_client: Any) -> None:
    response = make_response("ignored")
    response.choices = []
    openai_client.chat.completions.create.return_value = response
    llm = GenericOpenAI(client=openai_client, model_name="gpt-4o-mini")

    result = await llm.generate([UserMessage(content="Hi")])
    assert result.text == ""


@pytest.mark.asyncio
async def test_client_errors_become_llm_errors(openai_client: Any) -> None:
    openai_client.chat.completions.create.side_effect = RuntimeError("429 Too Many Requests")
    llm = GenericOpenAI(client=openai_client, model_name="gpt-4o-mini")

    with pytest.raises(LLMExecutionError, match="429"):
        await llm.generate([UserMessage(content="Hi")])
