"""storybook-mcp - MCP server for Storybook component and props lookup."""

__version__ = "0.1.0"
__author__ = "storybook-mcp contributors"

from .config import ServerConfig
from .errors import ConfigurationError, StorybookMCPError
from .models import CustomToolDefinition, StorybookV3Index, StorybookV5Index, parse_index
from .server import StorybookMCPServer

__all__ = [
    # Server
    'StorybookMCPServer',
    'ServerConfig',
    # Models
    'CustomToolDefinition',
    'StorybookV3Index',
    'StorybookV5Index',
    'parse_index',
    # Errors
    'ConfigurationError',
    'StorybookMCPError',
    # Version
    '__version__'
]
