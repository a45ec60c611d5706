"""Server instance wiring configuration to services."""

import logging
from typing import Mapping, Optional

from . import __version__
from .config import ServerConfig
from .services import BrowserService, CustomToolRegistry, MCPService, StorybookIndexFetcher
from .services.tools import CustomToolService, StorybookToolService

logger = logging.getLogger(__name__)


class StorybookMCPServer:
    """Main server orchestrating all services.

    Construction performs no network or browser activity; the configuration
    and the custom tool registry are fixed for the life of the instance.
    """

    def __init__(
        self,
        config: ServerConfig,
        index_fetcher: Optional[StorybookIndexFetcher] = None,
        browser_service: Optional[BrowserService] = None,
    ):
        """Initialize the server.

        Args:
            config: Validated server configuration
            index_fetcher: Optional fetcher override (defaults to one for config.storybook_url)
            browser_service: Optional browser service override
        """
        self.config = config
        self.custom_tools = CustomToolRegistry.load(config.custom_tools_json)
        self.index_fetcher = index_fetcher or StorybookIndexFetcher(config.storybook_url)
        self.browser_service = browser_service or BrowserService(
            headless=config.headless,
            selector_timeout=config.selector_timeout,
            settle_delay=config.settle_delay,
            operation_timeout=config.operation_timeout,
        )
        self.mcp_service = MCPService(
            storybook_tool_service=StorybookToolService(self.index_fetcher, self.browser_service),
            custom_tool_service=CustomToolService(self.browser_service),
            custom_tools=self.custom_tools,
            version=__version__,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StorybookMCPServer":
        """Create a server from environment variables.

        Raises:
            ConfigurationError: If STORYBOOK_URL is not set
        """
        return cls(ServerConfig.from_env(environ))

    async def run_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        logger.info(
            f"Storybook MCP server running on stdio (index: {self.config.storybook_url}, "
            f"custom tools: {len(self.custom_tools)})"
        )
        await self.mcp_service.run_stdio()
