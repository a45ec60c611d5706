"""CLI entry point for storybook-mcp."""

import asyncio
import sys
import signal
import logging
import argparse

from ..errors import ConfigurationError
from ..server import StorybookMCPServer
from .commands.validate import validate_tools

# Configure logging (stderr; stdout carries the MCP stream)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_mcp() -> int:
    """Construct the server from the environment and serve stdio."""
    try:
        server = StorybookMCPServer.from_env()
    except ConfigurationError as e:
        logger.error(f"Failed to start Storybook MCP Server: {e}")
        return 1

    # Set up signal handlers
    def signal_handler(sig, frame):
        logger.info("Received interrupt signal, shutting down...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting Storybook MCP Server...")
    asyncio.run(server.run_stdio())
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description='Storybook MCP Server')
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    subparsers = parser.add_subparsers(dest='command')
    subparsers.add_parser('mcp', help='Run the MCP server on stdio (default)')
    validate_parser = subparsers.add_parser(
        'validate-tools',
        help='Validate a JSON file of custom tool definitions'
    )
    validate_parser.add_argument('file', help='Path to a JSON array of custom tools')

    args = parser.parse_args()

    # Set log level
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Run command
    try:
        if args.command == 'validate-tools':
            validate_tools.main(args=[args.file], prog_name="storybook-mcp validate-tools")
        sys.exit(run_mcp())
    except KeyboardInterrupt:
        logger.info("Server interrupted")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
