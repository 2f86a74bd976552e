import inspect
from typing import Any, Annotated, Dict, List, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from ..models import ToolArgument
from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

JSON_ARG_TYPES = ("string", "integer", "number", "boolean", "array", "object")


class FieldTuple(BaseModel):
    """Ensures, that the dynamic model field definition is correctly typed for Pydantic's create_model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    annotation: Any
    field: FieldInfo


class ToolParameterFactory:
    """Capsules the extraction and validation of single function parameters for pydantic"""

    @classmethod
    def build_field_tuple(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> FieldTuple:
        """Creates the tuple of (annotation, FieldInfo) for a single function parameter.

        Args:
            param_name: The name of the parameter.
            param: The inspect.Parameter object.
            tool_name: The name of the tool for error reporting.

        Returns:
            A FieldTuple containing the type annotation and Pydantic Field configuration.
        """

        annotation = param.annotation
        description = cls._extract_description(annotation=annotation, param_name=param_name, tool_name=tool_name)

        pydantic_default = param.default if param.default is not inspect.Parameter.empty else ...

        return FieldTuple(annotation=annotation, field=Field(default=pydantic_default, description=description))

    @classmethod
    def build_arguments(cls, parameters_schema: Dict[str, Any]) -> List[ToolArgument]:
        """Derive the ordered argument declarations from a resolved parameters schema.

        Args:
            parameters_schema: Sanitized object schema of the generated parameters model.

        Returns:
            One ToolArgument per property, in declaration order.
        """
        required = set(parameters_schema.get("required", []))
        arguments = []
        for prop_name, prop_schema in parameters_schema.get("properties", {}).items():
            arguments.append(
                ToolArgument(
                    name=prop_name,
                    arg_type=cls.json_type_of(prop_schema),
                    description=prop_schema.get("description", ""),
                    required=prop_name in required,
                )
            )
        return arguments

    @staticmethod
    def json_type_of(prop_schema: Any) -> str:
        """Map a property schema onto one of the six argument types; unknown shapes become 'object'."""
        if not isinstance(prop_schema, dict):
            return "object"

        declared = prop_schema.get("type")
        if isinstance(declared, list):
            declared = next((t for t in declared if t != "null"), None)
        if declared in JSON_ARG_TYPES:
            return declared
        if "enum" in prop_schema and all(isinstance(v, str) for v in prop_schema["enum"]):
            return "string"
        return "object"

    @staticmethod
    def _extract_description(annotation: Any, param_name: str, tool_name: str) -> str:
        """Every Tools parameter needs 'Annotated[<class>, Field(description='...')] = ...' as its annotation.

        Args:
            annotation: The type annotation to inspect.
            param_name: The name of the parameter being checked.
            tool_name: The name of the tool for error reporting.

        Raises:
            ToolValidationError: If the parameter is missing a Pydantic Field description.
        """

        if get_origin(annotation) is Annotated:
            for metadata in get_args(annotation):
                if isinstance(metadata, FieldInfo) and metadata.description:
                    return metadata.description

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
        )
        logger.error(msg)
        raise ToolValidationError(msg)
