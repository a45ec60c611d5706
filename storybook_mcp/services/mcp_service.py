"""MCP server implementation: tool catalog and dispatch.

Built-in tools:
- getComponentList: names of all documented components
- getComponentPropsType: props table of one component (alias: getComponentProps)
- getComponentsProps: props tables of several components in one browser session

Custom tools configured through CUSTOM_TOOLS are listed after the built-ins.
Built-in names win when a custom tool reuses one.
"""

import logging
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator
from mcp.server import Server
from mcp.types import TextContent, Tool

from ..errors import ToolArgumentsError, UnknownToolError
from .custom_tool_registry import CustomToolRegistry
from .tools import CustomToolService, StorybookToolService

logger = logging.getLogger(__name__)

SERVER_NAME = "storybook-mcp"

BUILTIN_TOOLS = [
    Tool(
        name="getComponentList",
        description="Get a list of all components from the configured Storybook",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    Tool(
        name="getComponentPropsType",
        description="Get props type information for a specific component",
        inputSchema={
            "type": "object",
            "properties": {
                "componentName": {
                    "type": "string",
                    "description": "The name of the component to get props information for",
                },
            },
            "required": ["componentName"],
        },
    ),
    Tool(
        name="getComponentsProps",
        description="Get props type information for multiple components at once",
        inputSchema={
            "type": "object",
            "properties": {
                "componentNames": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "description": "The names of the components to get props information for",
                },
            },
            "required": ["componentNames"],
        },
    ),
]

# Accepted by dispatch but not listed
TOOL_ALIASES = {"getComponentProps": "getComponentPropsType"}


class MCPService:
    """MCP server exposing Storybook tools and operator-defined custom tools."""

    def __init__(
        self,
        storybook_tool_service: StorybookToolService,
        custom_tool_service: CustomToolService,
        custom_tools: Optional[CustomToolRegistry] = None,
        version: str = "0.0.1",
    ):
        """Initialize MCP service.

        Args:
            storybook_tool_service: Handlers for the built-in tools
            custom_tool_service: Runner for custom tool handlers
            custom_tools: Registry of valid custom tool definitions
            version: Server version reported to clients
        """
        self.storybook_tool_service = storybook_tool_service
        self.custom_tool_service = custom_tool_service
        self.custom_tools = custom_tools or CustomToolRegistry()
        self._builtins: Dict[str, Tool] = {tool.name: tool for tool in BUILTIN_TOOLS}
        for custom_tool in self.custom_tools:
            if self._is_builtin(custom_tool.name):
                logger.warning(
                    f"Custom tool '{custom_tool.name}' is shadowed by a built-in tool"
                )
        self.server = Server(
            name=SERVER_NAME,
            version=version,
            instructions="Query a Storybook instance for its components and their props tables.",
        )
        self._setup_tools()

    def _setup_tools(self) -> None:
        """Register list/call handlers with the MCP server."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return self.list_tools()

        # Arguments are validated in handle() so failures keep the "Error: ..." text
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Handle tool calls; failures come back as text, never as protocol errors."""
            return await self.handle(name, arguments)

    def list_tools(self) -> List[Tool]:
        """Built-in tools followed by custom tools, in configuration order."""
        tools = list(BUILTIN_TOOLS)
        for custom_tool in self.custom_tools:
            if not self._is_builtin(custom_tool.name):
                tools.append(custom_tool.to_tool())
        return tools

    def _is_builtin(self, name: str) -> bool:
        return TOOL_ALIASES.get(name, name) in self._builtins

    # ========================================================================
    # Dispatch
    # ========================================================================

    async def handle(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[TextContent]:
        """Route a tool call and wrap every outcome as text content."""
        arguments = arguments or {}
        try:
            return await self._dispatch(name, arguments)
        except Exception as e:
            logger.warning(f"Tool {name} failed: {e}")
            logger.debug("Tool failure details", exc_info=True)
            return [TextContent(type="text", text=f"Error: {e}")]

    async def _dispatch(self, name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        builtin_name = TOOL_ALIASES.get(name, name)
        builtin = self._builtins.get(builtin_name)

        if builtin is not None:
            # Built-in names are matched before the custom registry
            self._validate_arguments(builtin, arguments)
            if builtin_name == "getComponentList":
                return await self.storybook_tool_service.get_component_list()
            elif builtin_name == "getComponentPropsType":
                return await self.storybook_tool_service.get_component_props(
                    arguments["componentName"]
                )
            elif builtin_name == "getComponentsProps":
                return await self.storybook_tool_service.get_components_props(
                    arguments["componentNames"]
                )

        custom_tool = self.custom_tools.get(name)
        if custom_tool is None:
            raise UnknownToolError(name)

        self._validate_arguments(custom_tool.to_tool(), arguments)
        return await self.custom_tool_service.run(custom_tool, arguments)

    def _validate_arguments(self, tool: Tool, arguments: Dict[str, Any]) -> None:
        validator = Draft7Validator(tool.inputSchema)
        errors = sorted(validator.iter_errors(arguments), key=lambda err: list(err.path))
        if errors:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err.path) or '<arguments>'}: {err.message}"
                for err in errors
            )
            raise ToolArgumentsError(f"Invalid arguments for tool '{tool.name}': {details}")

    # ========================================================================
    # Server lifecycle methods
    # ========================================================================

    async def run_stdio(self) -> None:
        """Run the MCP server with stdio transport."""
        from mcp.server import NotificationOptions
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            init_options = self.server.create_initialization_options(
                notification_options=NotificationOptions(
                    tools_changed=False, prompts_changed=False, resources_changed=False
                ),
                experimental_capabilities={},
            )

            await self.server.run(
                read_stream,
                write_stream,
                init_options,
                raise_exceptions=False,
                stateless=False,
            )
