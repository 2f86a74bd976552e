from typing import Any, Dict, Iterable, List, Optional, cast

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from mini_agent_lib.agent_core import GenericLLM, GenerationResult, TokenUsage, get_logger
from mini_agent_lib.agent_core.messages import BaseMessage, MessageRole

logger = get_logger(__name__)


class GenericOpenAI(GenericLLM):
    """
    Generation backend for OpenAI chat completion models (and OpenAI-compatible servers).

    Tool calls travel inside the message text, so tool results are sent back as
    user turns rather than native ``tool`` messages, which would require call ids.
    """

    ROLE_MAPPING: Dict[MessageRole, str] = {
        MessageRole.SYSTEM: "system",
        MessageRole.USER: "user",
        MessageRole.ASSISTANT: "assistant",
        MessageRole.TOOL_RESULT: "user",
        MessageRole.DEVELOPER: "system",
    }

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        temp: float = 1.0,
        max_tokens: int = 3000,
        max_retries: int = 0,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the GenericOpenAI backend.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier for the OpenAI model to use (e.g., 'gpt-4o-mini').
            temp: The temperature for text generation, controlling randomness.
            max_tokens: The maximum number of tokens to generate in the response.
            max_retries: Number of retries on failure.
            base_retry_delay: Initial retry delay in seconds.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client: AsyncOpenAI = client
        self.model: str = model_name
        self.temperature = temp
        self.max_tokens = max_tokens

    async def _generate_impl(self, messages: List[BaseMessage]) -> GenerationResult:
        openai_messages = self._convert_history(messages)
        logger.debug(f"Sending {len(openai_messages)} message(s) to OpenAI model '{self.model}'.")

        # The client expects a union of typed message params; plain dicts are structurally compatible
        response: ChatCompletion = await self.client.chat.completions.create(
            model=self.model,
            messages=cast(Iterable[Any], openai_messages),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        if response.choices:
            text = response.choices[0].message.content or ""
        else:
            logger.warning("OpenAI response contained no choices.")
            text = ""

        return self._build_result(text, self._extract_tokens(response), raw=response)

    @classmethod
    def _convert_history(cls, history: List[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts generic messages to OpenAI chat message dictionaries.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of OpenAI message dictionaries.
        """
        return [{"role": cls.ROLE_MAPPING[msg.role], "content": msg.content} for msg in history]

    @staticmethod
    def _extract_tokens(response: ChatCompletion) -> TokenUsage:
        usage: Optional[Any] = getattr(response, "usage", None)
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=usage.prompt_tokens or 0,
            completion_tokens=usage.completion_tokens or 0,
            total_tokens=usage.total_tokens or 0,
        )
