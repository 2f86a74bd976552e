"""Tool descriptor models shared by the registry, the prompt builder and the agent loop."""

import json
from typing import Callable, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

ArgType = Literal["string", "integer", "number", "boolean", "array", "object"]


class ToolArgument(BaseModel):
    """A single declared argument of a tool, as shown to the model.

    Attributes:
        name: Parameter name the model must use as key inside ``args``.
        arg_type: JSON type of the value.
        description: Natural-language explanation of the parameter.
        required: Whether the model has to supply the value.
    """

    name: str
    arg_type: ArgType
    description: str
    required: bool = True


class ToolSchema(BaseModel):
    """Model-facing schema record for one tool."""

    name: str
    description: str
    args: List[ToolArgument] = Field(default_factory=list)

    def to_prompt(self) -> str:
        """Render the schema as the compact JSON text placed in the prompt."""
        return json.dumps(self.model_dump(), ensure_ascii=False)


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that can be registered with an agent.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The callable (sync or async) that implements the tool's logic.
        arguments: Ordered argument declarations rendered into the tool catalogue.
        args_model: Optional Pydantic model used for decoding and coercing arguments.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    func: Callable
    arguments: List[ToolArgument] = Field(default_factory=list)
    args_model: Optional[Type[BaseModel]] = None

    def to_schema(self, name: Optional[str] = None) -> ToolSchema:
        """Build the schema record, optionally under the name the tool is registered as."""
        return ToolSchema(name=name or self.name, description=self.description, args=list(self.arguments))
