"""The agent decision loop: alternate model generation and tool execution until a final answer."""

from typing import Callable, List, Optional, Union

from .config import AgentConfig
from .models import AgentResult
from .prompts import build_tool_messages, format_tool_result
from ..base import GenerationPort, GenerationResult, TokenUsage
from ..exceptions import AgentError, LLMExecutionError, MaxIterationsExceededError, ToolNotFoundError
from ..messages import AssistantMessage, BaseMessage, SystemMessage, ToolResultMessage, UserMessage
from ..tools import ToolDefinition, ToolRegistry
from ..logger import get_logger

logger = get_logger(__name__)


class Agent:
    """
    High-level agent holding a generation backend, a tool registry and loop settings.

    Each ``call_llm`` builds a fresh conversation, so an agent keeps no state
    between calls and can be shared by concurrent tasks as long as tools are
    registered up front.
    """

    def __init__(
        self,
        name: str,
        llm: GenerationPort,
        registry: Optional[ToolRegistry] = None,
        system_prompt: Optional[str] = None,
        max_iterations: int = 100,
    ) -> None:
        """
        Initializes the agent.

        Args:
            name: A short, human-friendly name for the agent instance.
            llm: The generation backend used to produce model turns.
            registry: Tools the model may call. A new empty registry is created if omitted.
            system_prompt: Optional instructions describing the agent's role.
            max_iterations: Maximum number of generation turns per call.

        Raises:
            ConfigError: If ``max_iterations`` is not a positive integer.
        """
        config = AgentConfig.build(max_iterations=max_iterations, system_prompt=system_prompt)
        self.name = name
        self.llm = llm
        self.registry = registry if registry is not None else ToolRegistry()
        self.system_prompt = config.system_prompt
        self.max_iterations = config.max_iterations
        logger.info(f"Initialized agent '{name}' with max_iterations={self.max_iterations}")

    @classmethod
    def from_config(
        cls, name: str, llm: GenerationPort, config: AgentConfig, registry: Optional[ToolRegistry] = None
    ) -> "Agent":
        """Create an agent from an ``AgentConfig``; a new registry picks up its tool timeout."""
        if registry is None:
            registry = ToolRegistry(tool_timeout=config.tool_timeout)
        return cls(
            name=name,
            llm=llm,
            registry=registry,
            system_prompt=config.system_prompt,
            max_iterations=config.max_iterations,
        )

    def register_tool(self, tool: Union[ToolDefinition, Callable], name: Optional[str] = None) -> "Agent":
        """Register a tool under ``name`` or its own name, replacing any previous one.

        Returns:
            The agent itself, for chaining.
        """
        self.registry.register(tool, name=name)
        return self

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        return self.registry.lookup(name)

    def set_system_prompt(self, prompt: str) -> None:
        self.system_prompt = prompt

    def change_max_iterations(self, max_iterations: int) -> None:
        """Change the loop bound.

        Raises:
            ConfigError: If the value is not a positive integer.
        """
        self.max_iterations = AgentConfig.build(max_iterations=max_iterations).max_iterations

    def build_initial_messages(self, prompt: str) -> List[BaseMessage]:
        """
        Builds the opening conversation for a run.

        Order: system prompt (if set), the tool protocol note and one schema
        message per tool (if any tools are registered), then the user prompt.

        Args:
            prompt: The user's prompt.

        Returns:
            The initial message sequence.
        """
        messages: List[BaseMessage] = []
        if self.system_prompt is not None:
            messages.append(SystemMessage(content=self.system_prompt))
        messages.extend(build_tool_messages(self.registry.describe_all()))
        messages.append(UserMessage(content=prompt))
        return messages

    async def call_llm(self, prompt: str) -> AgentResult:
        """
        Runs the decision loop for a prompt.

        Every model turn with tool calls is recorded, its tools are run in the
        order requested and their results are appended before the next turn.
        The first turn without tool calls is the final answer.

        Args:
            prompt: The user's prompt.

        Returns:
            The final answer with the token usage summed over all turns.

        Raises:
            ToolNotFoundError: If the model requests an unregistered tool.
            ToolExecutionError: If a tool fails or its arguments do not match.
            LLMExecutionError: If the generation backend fails.
            MaxIterationsExceededError: If no final answer arrives within ``max_iterations`` turns.
        """
        messages = self.build_initial_messages(prompt)
        tokens = TokenUsage()

        for iteration in range(self.max_iterations):
            logger.debug(f"Agent '{self.name}' iteration {iteration + 1}/{self.max_iterations}.")
            result = await self._generate(messages)
            tokens = tokens + result.tokens

            if not result.tool_calls:
                logger.debug("No tool calls found in response. Loop finished.")
                return AgentResult(tokens=tokens, generation=result.text)

            logger.info(
                f"Loop {iteration + 1}/{self.max_iterations}: Processing {len(result.tool_calls)} tool call(s)."
            )
            messages.append(AssistantMessage(content=result.text))

            for call in result.tool_calls:
                tool = self.registry.lookup(call.name)
                if tool is None:
                    logger.error(f"Tool '{call.name}' requested by the model is not registered.")
                    raise ToolNotFoundError(call.name)

                output = await self.registry.invoke(tool, call.arguments, name=call.name)
                messages.append(ToolResultMessage(name=call.name, content=format_tool_result(call.name, output)))

        logger.warning(f"Max iterations ({self.max_iterations}) reached without a final answer.")
        raise MaxIterationsExceededError(self.max_iterations)

    async def _generate(self, messages: List[BaseMessage]) -> GenerationResult:
        try:
            # Hand over a snapshot; the log keeps growing after this call
            return await self.llm.generate(list(messages))
        except AgentError:
            raise
        except Exception as e:
            msg = f"LLM error: {e}"
            logger.error(msg)
            raise LLMExecutionError(msg) from e
