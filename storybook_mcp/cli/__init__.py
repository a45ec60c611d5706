"""Command line interface for storybook-mcp."""
