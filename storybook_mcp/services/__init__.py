"""Services for storybook-mcp."""

from .browser_service import BatchResult, BrowserService
from .custom_tool_registry import CustomToolRegistry
from .index_fetcher import StorybookIndexFetcher
from .mcp_service import MCPService

__all__ = [
    "BatchResult",
    "BrowserService",
    "CustomToolRegistry",
    "MCPService",
    "StorybookIndexFetcher",
]
