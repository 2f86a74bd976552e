"""Core abstractions for language model backends."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Coroutine, List, Optional, Protocol, Sequence, runtime_checkable

from .models import GenerationResult, TokenUsage
from ..exceptions import LLMExecutionError
from ..messages import BaseMessage
from ..tools.extractor import ToolCallExtractor
from ..logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class GenerationPort(Protocol):
    """
    Protocol the agent uses to obtain the model's next turn.

    Implementations map the message roles onto what their backend supports,
    report token usage when available and extract tool calls from the raw text.
    """

    async def generate(self, messages: Sequence[BaseMessage]) -> GenerationResult:
        """Produce the next model turn for the given conversation."""
        ...


class GenericLLM(ABC):
    """Abstract base class for generation backends.

    Subclasses implement ``_generate_impl``. Failures are surfaced as
    ``LLMExecutionError``; retries are off unless ``max_retries`` is set.
    """

    def __init__(self, max_retries: int = 0, base_retry_delay: float = 1.0):
        self.max_retries = max_retries
        self.base_retry_delay = base_retry_delay

    async def _execute_with_retry(
        self,
        func: Callable[..., Coroutine[Any, Any, GenerationResult]],
        *args,
        **kwargs,
    ) -> GenerationResult:
        """
        Executes a function with retry logic.

        Args:
            func: The asynchronous function to execute.
            *args: Positional arguments for the function.
            **kwargs: Keyword arguments for the function.

        Returns:
            The result of the function call.

        Raises:
            Exception: The last encountered exception if all retries fail.
        """
        delay = self.base_retry_delay
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if attempt == self.max_retries:
                    raise

                logger.warning(f"API Error (Retry: {attempt + 1}/{self.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)
                delay *= 2  # Exponential backoff

        msg = f"Failed to get response after {self.max_retries} retries."
        logger.error(msg)
        raise LLMExecutionError(msg)

    async def generate(self, messages: Sequence[BaseMessage]) -> GenerationResult:
        """
        Produces the next model turn.

        Args:
            messages: The full conversation so far.

        Returns:
            The generation with token usage and extracted tool calls.

        Raises:
            LLMExecutionError: If the backend call fails.
        """
        try:
            return await self._execute_with_retry(self._generate_impl, list(messages))
        except LLMExecutionError:
            raise
        except Exception as e:
            msg = f"{type(self).__name__} generation failed: {e}"
            logger.error(msg)
            raise LLMExecutionError(msg) from e

    @abstractmethod
    async def _generate_impl(self, messages: List[BaseMessage]) -> GenerationResult:
        pass

    @staticmethod
    def _build_result(text: Optional[str], tokens: Optional[TokenUsage] = None, raw: Any = None) -> GenerationResult:
        """Wrap backend output into a GenerationResult, extracting tool calls from the text."""
        text = text or ""
        return GenerationResult(
            text=text,
            tokens=tokens or TokenUsage(),
            tool_calls=ToolCallExtractor.extract(text),
            raw=raw,
        )
