"""Tool registry: stores tools by name, renders their catalogue and invokes them."""

import asyncio
import inspect
import json
import threading
from typing import Any, Callable, Dict, List, Optional, Union, cast

import jsonref  # type: ignore
from pydantic import ValidationError, create_model

from .models import ToolDefinition, ToolSchema
from .schema import SchemaValidator, ToolParameterFactory
from ..exceptions import (
    ToolExecutionError,
    ToolNotFoundError,
    ToolParamsMismatchError,
    ToolRegistrationError,
    ToolValidationError,
)
from ..logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A central registry to manage and access all tools available to an agent.

    Tools are kept in insertion order, so the catalogue rendered for the model is
    stable. Registering a name that already exists replaces the previous tool.
    Mutations are serialized with a lock; lookups and invocations may be issued
    concurrently by several agents sharing the registry.
    """

    def __init__(self, tool_timeout: float = 180.0) -> None:
        """Initialize the ToolRegistry.

        Args:
            tool_timeout: Timeout in seconds for a single tool invocation.
        """
        self.tools: Dict[str, ToolDefinition] = {}
        self.tool_timeout = tool_timeout
        self._lock = threading.RLock()

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        name: Optional[str] = None,
    ) -> ToolDefinition:
        """
        Register a new tool.

        The tool can be given as a ready `ToolDefinition`, as a plain function whose
        definition is inferred from its signature and docstring, or as a name string
        together with `func`.

        Args:
            name_or_tool: A `ToolDefinition`, a callable, or the tool name (str).
            description: Optional description override; defaults to the function's docstring.
            func: The callable implementing the tool. Required if `name_or_tool` is a string.
            name: Optional key to register the tool under instead of its own name.

        Returns:
            The registered tool definition.

        Raises:
            ToolRegistrationError: If a name string is given without `func`.
            ToolValidationError: If the definition cannot be inferred from the function.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif isinstance(name_or_tool, str):
            if func is None:
                msg = "If passing name as string, func is required."
                logger.error(msg)
                raise ToolRegistrationError(msg)
            tool = self.generate_tool_definition(func, name=name_or_tool, description=description)
        elif callable(name_or_tool):
            tool = self.generate_tool_definition(name_or_tool, description=description)
        else:
            msg = f"Cannot register object of type '{type(name_or_tool).__name__}' as a tool."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        key = name or tool.name
        with self._lock:
            if key in self.tools:
                logger.warning(f"Tool '{key}' is already registered. Replacing it.")
            self.tools[key] = tool
        logger.info(f"Successfully registered tool: '{key}'")
        return tool

    def unregister(self, tool_name: str) -> None:
        """Unregister a tool from the registry.

        Args:
            tool_name: The name of the tool to remove.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        with self._lock:
            if tool_name not in self.tools:
                raise ToolNotFoundError(tool_name, f"Tool '{tool_name}' not found in the registry.")
            del self.tools[tool_name]
        logger.info(f"Successfully unregistered tool: '{tool_name}'")

    def tool(self, func: Callable) -> Callable:
        """A decorator to turn a function into an agent tool.

        Args:
            func: The function to decorate.

        Returns:
            The original function, after registering it as a tool.
        """
        self.register(func)
        return func

    def lookup(self, name: str) -> Optional[ToolDefinition]:
        """Return the tool registered under the exact (case-sensitive) name, if any."""
        with self._lock:
            return self.tools.get(name)

    @property
    def names(self) -> List[str]:
        with self._lock:
            return list(self.tools)

    def describe_all(self) -> List[ToolSchema]:
        """Render every registered tool into its model-facing schema record.

        Returns:
            The schema records in registration order.
        """
        with self._lock:
            snapshot = list(self.tools.items())
        return [tool.to_schema(name=key) for key, tool in snapshot]

    async def invoke(self, tool: ToolDefinition, raw_args: Any, name: Optional[str] = None) -> str:
        """Decode the arguments for a tool, run it and return its text output.

        Args:
            tool: The tool to run.
            raw_args: Model-supplied arguments (dict, JSON string or None).
            name: The name the tool was requested under, used in logs and errors.
                Defaults to the tool's own name.

        Returns:
            The tool output as text.

        Raises:
            ToolParamsMismatchError: If the arguments cannot be decoded into the tool's parameters.
            ToolExecutionError: If the tool fails or times out.
        """
        tool_name = name or tool.name
        function_args = self._decode_arguments(tool, raw_args, tool_name)

        logger.info(f"Executing tool '{tool_name}'...")
        try:
            result = await self._execute_tool(tool_name, tool.func, function_args)
        except ToolExecutionError:
            raise
        except Exception as exc:
            logger.error(f"Tool '{tool_name}' failed: {exc} ({type(exc).__name__})")
            raise ToolExecutionError(tool_name, str(exc) or type(exc).__name__) from exc

        logger.debug(f"Tool '{tool_name}' executed successfully.")
        return self._to_text(result)

    def __contains__(self, name: object) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)

    def _decode_arguments(self, tool: ToolDefinition, raw_args: Any, tool_name: str) -> Dict[str, Any]:
        """Normalize raw arguments and validate them against the tool's parameters.

        Raises:
            ToolParamsMismatchError: If decoding or validation fails.
        """
        function_args = self._normalize_function_args(tool_name, raw_args)

        if tool.args_model is not None:
            try:
                validated = tool.args_model.model_validate(function_args)
            except ValidationError as exc:
                logger.warning(f"Validation error for '{tool_name}': {exc}")
                raise ToolParamsMismatchError(tool_name, str(exc)) from exc
            # Keep nested models as model instances instead of dumping them to dicts
            return {field: getattr(validated, field) for field in type(validated).model_fields}

        try:
            inspect.signature(tool.func).bind(**function_args)
        except TypeError as exc:
            logger.warning(f"Argument binding failed for '{tool_name}': {exc}")
            raise ToolParamsMismatchError(tool_name, str(exc)) from exc
        except ValueError:
            # Builtins without an inspectable signature are called as-is
            pass
        return function_args

    @staticmethod
    def _normalize_function_args(tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Handles JSON strings, dictionaries, or None values.

        Args:
            tool_name: Name of the tool (for error reporting).
            raw_args: The raw arguments (dict, string, or None).

        Returns:
            A dictionary of normalized arguments.

        Raises:
            ToolParamsMismatchError: If arguments cannot be parsed or are not an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise ToolParamsMismatchError(tool_name, f"arguments are not valid JSON: {exc}") from exc

            if parsed is None:
                return {}
            if not isinstance(parsed, dict):
                raise ToolParamsMismatchError(tool_name, "arguments must decode to a JSON object.")
            return parsed

        raise ToolParamsMismatchError(tool_name, f"unsupported arguments type '{type(raw_args).__name__}'.")

    async def _execute_tool(self, tool_name: str, tool_function: Callable, function_args: Dict[str, Any]) -> Any:
        """Execute the tool function under the registry timeout.

        Sync functions run in a worker thread so they cannot block the event loop.
        Only an expired deadline is reported as a timeout; a ``TimeoutError`` raised
        by the tool itself propagates as a regular tool failure.

        Raises:
            ToolExecutionError: If the deadline expires.
        """
        deadline = asyncio.timeout(self.tool_timeout)
        try:
            async with deadline:
                return await self._run_tool(tool_function, function_args)
        except TimeoutError as exc:
            if not deadline.expired():
                raise
            msg = f"Tool execution timed out after {self.tool_timeout} seconds."
            logger.error(f"Tool '{tool_name}' failed: {msg}")
            raise ToolExecutionError(tool_name, msg) from exc

    @staticmethod
    async def _run_tool(tool_function: Callable, function_args: Dict[str, Any]) -> Any:
        if inspect.iscoroutinefunction(tool_function):
            return await tool_function(**function_args)

        result = await asyncio.to_thread(tool_function, **function_args)
        if inspect.isawaitable(result):
            return await result
        return result

    @staticmethod
    def _to_text(result: Any) -> str:
        if isinstance(result, str):
            return result
        if result is None:
            return ""
        if isinstance(result, (dict, list)):
            return json.dumps(result, ensure_ascii=False, default=str)
        return str(result)

    def generate_tool_definition(
        self, func: Callable, name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a callable function.

        Args:
            func: The function to generate a definition for.
            name: Optional name override for the tool.
            description: Optional description override for the tool.

        Returns:
            A ToolDefinition object containing the tool's metadata and argument declarations.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        signature = self._resolve_signature(func, tool_name)
        fields = self._build_fields(signature, tool_name)

        # create_model expects **field_definitions: Any
        dynamic_params_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))
        raw_schema = dynamic_params_model.model_json_schema()
        # 1. Check for recursion
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # 2. Resolve refs using jsonref
        # proxies=False ensures we get a plain dict back, not JsonRef objects
        parameters_schema = jsonref.replace_refs(raw_schema, proxies=False)

        # 3. Sanitize schema (remove $defs, title, collapse Optional)
        parameters_schema = SchemaValidator.sanitize_schema(parameters_schema)

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            arguments=ToolParameterFactory.build_arguments(parameters_schema),
            args_model=dynamic_params_model,
        )

    @staticmethod
    def _resolve_signature(func: Callable, tool_name: str) -> inspect.Signature:
        # Annotations are strings in modules using `from __future__ import annotations`
        try:
            return inspect.signature(func, eval_str=True)
        except (NameError, SyntaxError, TypeError) as exc:
            msg = f"Cannot resolve the parameter annotations of tool '{tool_name}': {exc}"
            logger.error(msg)
            raise ToolValidationError(msg) from exc

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. LLMs need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            ft = ToolParameterFactory.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)
        return fields
