"""Operator-configured custom tool definitions."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping
from urllib.parse import urlsplit

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from mcp.types import Tool

from ..errors import CustomToolValidationError

REQUIRED_STRING_FIELDS = ("name", "description", "page", "handler")


def build_input_schema(parameters: Mapping[str, Any]) -> Dict[str, Any]:
    """Object schema whose required fields are all declared parameters."""
    return {
        "type": "object",
        "properties": dict(parameters),
        "required": list(parameters.keys()),
    }


def is_absolute_url(value: str) -> bool:
    parts = urlsplit(value)
    return bool(parts.scheme) and bool(parts.netloc)


@dataclass(frozen=True)
class CustomToolDefinition:
    """A named script that runs against a fixed page.

    Attributes:
        name: Unique tool name exposed to MCP clients
        description: Tool description shown in the tool listing
        page: Absolute URL the handler runs against
        handler: JavaScript evaluated in the page context
        parameters: Mapping of parameter name to JSON schema
    """

    name: str
    description: str
    page: str
    handler: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "CustomToolDefinition":
        """Validate one raw definition.

        Raises:
            CustomToolValidationError: Naming the first field that failed
        """
        if not isinstance(data, Mapping):
            raise CustomToolValidationError(
                "<definition>", "custom tool definition must be a JSON object"
            )

        for field_name in REQUIRED_STRING_FIELDS:
            value = data.get(field_name)
            if not isinstance(value, str) or not value.strip():
                raise CustomToolValidationError(
                    field_name, f"'{field_name}' must be a non-empty string"
                )

        page = data["page"]
        if not is_absolute_url(page):
            raise CustomToolValidationError(
                "page", f"'page' must be an absolute URL, got {page!r}"
            )

        parameters = data.get("parameters")
        if parameters is None:
            parameters = {}
        if not isinstance(parameters, Mapping):
            raise CustomToolValidationError(
                "parameters", "'parameters' must be an object mapping names to schemas"
            )

        try:
            Draft7Validator.check_schema(build_input_schema(parameters))
        except SchemaError as e:
            raise CustomToolValidationError(
                "parameters", f"'parameters' is not a valid JSON schema: {e.message}"
            ) from e

        return cls(
            name=data["name"],
            description=data["description"],
            page=page,
            handler=data["handler"],
            parameters=dict(parameters),
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return build_input_schema(self.parameters)

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )
