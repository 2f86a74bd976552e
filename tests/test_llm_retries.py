import pytest
from unittest.mock import AsyncMock
from typing import List

from mini_agent_lib import GenerationPort, GenerationResult, GenericLLM, LLMExecutionError, ToolCallRequest
from mini_agent_lib.agent_core.messages import BaseMessage, UserMessage


# Mock implementation for testing GenericLLM base logic
class MockLLM(GenericLLM):
    def __init__(self, max_retries: int = 0, base_retry_delay: float = 0.01):
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.generate_impl_mock = AsyncMock()

    async def _generate_impl(self, messages: List[BaseMessage]) -> GenerationResult:
        return await self.generate_impl_mock(messages)


def test_initialization():
    """Retries are off by default."""
    llm = MockLLM()
    assert llm.max_retries == 0
    assert isinstance(llm, GenerationPort)


@pytest.mark.asyncio
async def test_generate_happy_path():
    llm = MockLLM()
    expected = GenerationResult(text="Success")
    llm.generate_impl_mock.return_value = expected

    result = await llm.generate([UserMessage(content="hello")])
    assert result == expected
    assert llm.generate_impl_mock.call_count == 1


@pytest.mark.asyncio
async def test_generate_without_retries_fails_fast():
    llm = MockLLM()
    llm.generate_impl_mock.side_effect = Exception("Rate limit exceeded")

    with pytest.raises(LLMExecutionError, match="Rate limit exceeded") as excinfo:
        await llm.generate([UserMessage(content="hello")])

    assert llm.generate_impl_mock.call_count == 1
    assert "MockLLM generation failed" in str(excinfo.value)


@pytest.mark.asyncio
async def test_generate_retry_success():
    llm = MockLLM(max_retries=3)
    expected = GenerationResult(text="Success")
    llm.generate_impl_mock.side_effect = [Exception("Fail 1"), Exception("Fail 2"), expected]

    result = await llm.generate([UserMessage(content="hello")])
    assert result == expected
    assert llm.generate_impl_mock.call_count == 3


@pytest.mark.asyncio
async def test_generate_failure_after_retries():
    llm = MockLLM(max_retries=2)
    llm.generate_impl_mock.side_effect = Exception("Persistent Failure")

    with pytest.raises(LLMExecutionError, match="Persistent Failure"):
        await llm.generate([UserMessage(content="hello")])
    # Initial call + 2 retries = 3 calls
    assert llm.generate_impl_mock.call_count == 3


@pytest.mark.asyncio
async def test_backend_errors_pass_through_unwrapped():
    llm = MockLLM()
    original = LLMExecutionError("Invalid response: missing message")
    llm.generate_impl_mock.side_effect = original

    with pytest.raises(LLMExecutionError) as excinfo:
        await llm.generate([])
    assert excinfo.value is original


def test_build_result_extracts_tool_calls():
    result = GenericLLM._build_result('Calling: {"tool_calls":[{"name":"get_weather","args":{"city":"Oslo"}}]}')
    assert result.tool_calls == [ToolCallRequest(name="get_weather", arguments={"city": "Oslo"})]
    assert result.tokens.total_tokens == 0

    assert GenericLLM._build_result(None).text == ""
