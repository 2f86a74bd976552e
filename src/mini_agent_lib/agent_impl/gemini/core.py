from typing import Dict, List, Optional, Tuple

from google.genai import types
from google.genai.client import AsyncClient
from google.genai.types import GenerateContentResponse

from mini_agent_lib.agent_core import GenericLLM, GenerationResult, TokenUsage, get_logger
from mini_agent_lib.agent_core.messages import BaseMessage, MessageRole

logger = get_logger(__name__)


class GenericGemini(GenericLLM):
    """
    Generation backend for Google's Gemini models.

    Gemini has no system role in the conversation contents. System and developer
    turns are folded, in order, into the request's ``system_instruction``;
    tool results are sent as user turns.
    """

    ROLE_MAPPING: Dict[MessageRole, str] = {
        MessageRole.USER: "user",
        MessageRole.ASSISTANT: "model",
        MessageRole.TOOL_RESULT: "user",
    }

    def __init__(
        self,
        aclient: AsyncClient,
        model_name: str,
        temp: float = 1.0,
        max_tokens: int = 3000,
        max_retries: int = 0,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the GenericGemini backend.

        Args:
            aclient: The initialized Google GenAI async client (``Client(...).aio``).
            model_name: The identifier for the Gemini model to use (e.g., 'gemini-flash-latest').
            temp: The temperature for text generation, controlling randomness.
            max_tokens: The maximum number of tokens to generate in the response.
            max_retries: Number of retries on failure.
            base_retry_delay: Initial retry delay in seconds.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client: AsyncClient = aclient
        self.model: str = model_name
        self.temperature = temp
        self.max_tokens = max_tokens
        logger.info(f"Initialized GenericGemini with model='{model_name}', temp={temp}, max_tokens={max_tokens}")

    async def _generate_impl(self, messages: List[BaseMessage]) -> GenerationResult:
        system_instruction, contents = self._convert_history(messages)
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
        )
        logger.debug(f"Sending {len(contents)} content(s) to Gemini model '{self.model}'.")

        response: GenerateContentResponse = await self.client.models.generate_content(
            model=self.model,
            contents=contents,  # type: ignore[arg-type]
            config=config,
        )
        return self._build_result(response.text, self._extract_tokens(response), raw=response)

    @classmethod
    def _convert_history(cls, history: List[BaseMessage]) -> Tuple[Optional[str], List[types.Content]]:
        """
        Splits generic messages into a system instruction and Gemini contents.

        Args:
            history: List of BaseMessage objects.

        Returns:
            The joined system instruction (or None) and the list of Gemini Content objects.
        """
        instructions: List[str] = []
        contents: List[types.Content] = []
        for msg in history:
            if msg.role in (MessageRole.SYSTEM, MessageRole.DEVELOPER):
                instructions.append(msg.content)
                continue
            contents.append(types.Content(role=cls.ROLE_MAPPING[msg.role], parts=[types.Part(text=msg.content)]))

        system_instruction = "\n\n".join(instructions) if instructions else None
        return system_instruction, contents

    @staticmethod
    def _extract_tokens(response: GenerateContentResponse) -> TokenUsage:
        usage = response.usage_metadata
        if usage is None:
            return TokenUsage()
        prompt_tokens = usage.prompt_token_count or 0
        completion_tokens = usage.candidates_token_count or 0
        return TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=usage.total_token_count or prompt_tokens + completion_tokens,
        )
