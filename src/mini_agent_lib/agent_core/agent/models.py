from pydantic import BaseModel, Field

from ..base.models import TokenUsage


class AgentResult(BaseModel):
    """
    Outcome of a successful agent run.

    Attributes:
        tokens: Token usage summed over every generation of the run.
        generation: The final answer text.
    """

    tokens: TokenUsage = Field(default_factory=TokenUsage)
    generation: str = ""
