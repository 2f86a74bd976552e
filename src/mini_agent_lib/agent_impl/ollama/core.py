"""Ollama backend talking to the ``/api/chat`` endpoint of a local Ollama server."""

from typing import Any, Dict, List, Optional

import httpx

from mini_agent_lib.agent_core import GenericLLM, GenerationResult, TokenUsage, get_logger
from mini_agent_lib.agent_core.exceptions import LLMExecutionError
from mini_agent_lib.agent_core.messages import BaseMessage, MessageRole

logger = get_logger(__name__)

DEFAULT_MODEL = "llama3.2"
DEFAULT_BASE_URL = "http://localhost:11434"


class GenericOllama(GenericLLM):
    """
    Generation backend for models served by Ollama.

    Ollama has no developer role, so developer notes are sent as system turns.
    Tool results use Ollama's native ``tool`` role.
    """

    ROLE_MAPPING: Dict[MessageRole, str] = {
        MessageRole.SYSTEM: "system",
        MessageRole.USER: "user",
        MessageRole.ASSISTANT: "assistant",
        MessageRole.TOOL_RESULT: "tool",
        MessageRole.DEVELOPER: "system",
    }

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        options: Optional[Dict[str, Any]] = None,
        think: Optional[bool] = None,
        timeout: float = 120.0,
        client: Optional[httpx.AsyncClient] = None,
        max_retries: int = 0,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the Ollama backend.

        Args:
            model_name: Name of the model in Ollama (see ``ollama list``).
            base_url: URL of the Ollama API server.
            options: Model options passed through verbatim (e.g. ``{"temperature": 0.2}``).
            think: Whether to ask thinking models to separate their reasoning.
            timeout: Timeout for API requests in seconds.
            client: Optional preconfigured httpx client; a short-lived one is used per call otherwise.
            max_retries: Number of retries on failure.
            base_retry_delay: Initial retry delay in seconds.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.model = model_name
        self.base_url = base_url.rstrip("/")
        self.options = options
        self.think = think
        self.timeout = timeout
        self.client = client

    def with_model(self, model_name: str) -> "GenericOllama":
        self.model = model_name
        return self

    def with_options(self, options: Dict[str, Any]) -> "GenericOllama":
        self.options = options
        return self

    async def _generate_impl(self, messages: List[BaseMessage]) -> GenerationResult:
        payload = self._build_payload(messages)
        url = f"{self.base_url}/api/chat"
        logger.debug(f"Sending {len(messages)} message(s) to Ollama model '{self.model}'.")

        try:
            if self.client is not None:
                response = await self.client.post(url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"Ollama returned HTTP {e.response.status_code}: {e.response.text}"
            logger.error(msg)
            raise LLMExecutionError(msg) from e

        try:
            data = response.json()
            text = data["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            msg = f"Invalid response from Ollama: {e}"
            logger.error(msg)
            raise LLMExecutionError(msg) from e

        return self._build_result(text, self._extract_tokens(data), raw=data)

    def _build_payload(self, messages: List[BaseMessage]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": self._convert_history(messages),
            "stream": False,
        }
        if self.options:
            payload["options"] = self.options
        if self.think is not None:
            payload["think"] = self.think
        return payload

    @classmethod
    def _convert_history(cls, history: List[BaseMessage]) -> List[Dict[str, str]]:
        """Converts generic messages to Ollama chat messages."""
        return [{"role": cls.ROLE_MAPPING[msg.role], "content": msg.content} for msg in history]

    @staticmethod
    def _extract_tokens(data: Dict[str, Any]) -> TokenUsage:
        """Read token counts from the final response data; zero when Ollama reports none."""
        prompt_tokens = data.get("prompt_eval_count")
        completion_tokens = data.get("eval_count")
        if prompt_tokens is None and completion_tokens is None:
            return TokenUsage()
        prompt_tokens = prompt_tokens or 0
        completion_tokens = completion_tokens or 0
        return TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )
