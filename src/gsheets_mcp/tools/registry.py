"""Tool registry for managing available tools."""

import inspect
import logging
from typing import Any, Callable, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    create_model,
)

from .results import ToolResult, handle_api_error

logger = logging.getLogger(__name__)

ParameterType = Literal["string", "number", "integer", "boolean", "array", "object", "any"]

_SCALAR_TYPES: dict[str, Any] = {
    "string": StrictStr,
    "number": Union[StrictInt, StrictFloat],
    "integer": StrictInt,
    "boolean": StrictBool,
    "any": Any,
}

_INPUT_CONFIG = ConfigDict(extra="forbid")


class ToolParameter(BaseModel):
    """Definition of a tool parameter.

    Arrays describe their elements with ``items``; objects with a fixed shape
    list their fields in ``properties``. An object without ``properties``
    accepts any mapping.
    """

    name: str
    type: ParameterType
    description: str = ""
    required: bool = True
    default: Any = None
    enum: Optional[list[str]] = None
    items: Optional["ToolParameter"] = None
    properties: Optional[list["ToolParameter"]] = None

    def to_schema(self) -> dict:
        """Convert to a JSON Schema fragment."""
        if self.type == "any":
            prop: dict[str, Any] = {}
        else:
            prop = {"type": self.type}
        if self.description:
            prop["description"] = self.description
        if self.enum:
            prop["enum"] = self.enum
        if self.default is not None:
            prop["default"] = self.default
        if self.type == "array" and self.items is not None:
            prop["items"] = self.items.to_schema()
        if self.type == "object" and self.properties is not None:
            prop.update(_object_schema(self.properties))
        return prop

    def annotation(self, model_name: str) -> Any:
        """Return the type used to validate values of this parameter."""
        if self.type == "array":
            if self.items is None:
                return list[Any]
            return list[self.items.annotation(f"{model_name}Item")]
        if self.type == "object":
            if self.properties is None:
                return dict[str, Any]
            return build_input_model(model_name, self.properties)
        if self.enum:
            return Literal[tuple(self.enum)]
        return _SCALAR_TYPES[self.type]


def _object_schema(parameters: list[ToolParameter]) -> dict:
    return {
        "properties": {p.name: p.to_schema() for p in parameters},
        "required": [p.name for p in parameters if p.required],
        "additionalProperties": False,
    }


def _model_name(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.replace(".", "_").split("_"))


def build_input_model(name: str, parameters: list[ToolParameter]) -> type[BaseModel]:
    """Build a pydantic model that validates a record of parameters."""
    fields = {}
    for param in parameters:
        annotation = param.annotation(f"{name}{_model_name(param.name)}")
        default = ... if param.required else param.default
        fields[param.name] = (annotation, Field(default=default, description=param.description))
    return create_model(name, __config__=_INPUT_CONFIG, **fields)


def format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "Input validation error: " + "; ".join(problems)


class Tool(BaseModel):
    """Definition of a tool exposed to MCP clients."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)
    handler: Optional[Callable] = Field(default=None, exclude=True)

    _input_model: Optional[type[BaseModel]] = PrivateAttr(default=None)

    @property
    def input_model(self) -> type[BaseModel]:
        if self._input_model is None:
            self._input_model = build_input_model(
                f"{_model_name(self.name)}Input", self.parameters
            )
        return self._input_model

    def input_schema(self) -> dict:
        return {"type": "object", **_object_schema(self.parameters)}

    def to_schema(self) -> dict:
        """Convert to an MCP tool definition."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }

    def validate_arguments(self, arguments: Optional[dict]) -> dict:
        """Fill defaults, validate, and return only the supplied fields.

        Raises ``pydantic.ValidationError`` on missing, extra or mistyped
        fields. Optional fields without a default that were not supplied are
        absent from the result.
        """
        data = {p.name: p.default for p in self.parameters if p.default is not None}
        data.update(arguments or {})
        validated = self.input_model.model_validate(data)
        return validated.model_dump(exclude_unset=True)


class ToolRegistry:
    """Registry for managing tools available to MCP clients."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool):
        """Register a tool."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List all registered tools."""
        return list(self._tools.values())

    def to_schemas(self) -> list[dict]:
        return [tool.to_schema() for tool in self._tools.values()]

    async def execute(self, tool_name: str, arguments: Optional[dict] = None) -> ToolResult:
        """Validate the arguments and run a tool by name.

        Always returns a result; unknown tools, invalid input and handler
        failures come back as error results.
        """
        tool = self.get(tool_name)
        if not tool:
            return ToolResult.error(f"Unknown tool: {tool_name}")
        if not tool.handler:
            return ToolResult.error(f"Tool {tool_name} has no handler")

        try:
            kwargs = tool.validate_arguments(arguments)
        except ValidationError as e:
            logger.info(f"Rejected call to {tool_name}: {e.error_count()} validation error(s)")
            return ToolResult.error(format_validation_error(e))

        try:
            if inspect.iscoroutinefunction(tool.handler):
                return await tool.handler(**kwargs)
            return tool.handler(**kwargs)
        except Exception as e:
            return handle_api_error(e)
