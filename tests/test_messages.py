import pytest
from pydantic import ValidationError

from mini_agent_lib import (
    AssistantMessage,
    DeveloperMessage,
    MessageRole,
    SystemMessage,
    ToolResultMessage,
    UserMessage,
)


class TestMessageModels:
    """Tests for the provider-agnostic message models."""

    def test_roles_are_fixed_per_message_type(self):
        assert SystemMessage(content="s").role == MessageRole.SYSTEM
        assert UserMessage(content="u").role == MessageRole.USER
        assert AssistantMessage(content="a").role == MessageRole.ASSISTANT
        assert ToolResultMessage(content="t", name="tool").role == MessageRole.TOOL_RESULT
        assert DeveloperMessage(content="d").role == MessageRole.DEVELOPER

    def test_name_only_required_for_tool_results(self):
        assert UserMessage(content="Hello").name is None
        with pytest.raises(ValidationError):
            ToolResultMessage(content="Tool output")

    def test_messages_are_immutable(self):
        msg = UserMessage(content="Hello")
        with pytest.raises(ValidationError):
            msg.content = "changed"  # type: ignore[misc]

    def test_role_serializes_to_plain_string(self):
        dumped = ToolResultMessage(content="42", name="answer").model_dump(mode="json")
        assert dumped == {"role": "tool_result", "content": "42", "name": "answer"}
