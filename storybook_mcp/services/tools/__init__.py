"""Handler classes behind the MCP tools."""

from .custom_tool_service import CustomToolService, format_result
from .storybook_tool_service import StorybookToolService, format_batch

__all__ = [
    "CustomToolService",
    "StorybookToolService",
    "format_batch",
    "format_result",
]
