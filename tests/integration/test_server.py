"""Integration tests for server construction from the environment."""

import json
from unittest.mock import patch

import pytest
from mcp.types import CallToolRequest, ListToolsRequest

from storybook_mcp.errors import ConfigurationError
from storybook_mcp.server import StorybookMCPServer

ICON_TOOL = {
    "name": "getIconList",
    "description": "Get All Icons from the Icon page",
    "parameters": {},
    "page": "https://example.com/storybook/?path=/docs/icon--docs",
    "handler": "Array.from(document.querySelectorAll('.icon-name')).map(i => i.textContent)",
}


def test_missing_storybook_url_fails_before_any_io():
    with patch("storybook_mcp.server.StorybookIndexFetcher") as fetcher_cls, \
            patch("storybook_mcp.server.BrowserService") as browser_cls:
        with pytest.raises(ConfigurationError, match="STORYBOOK_URL"):
            StorybookMCPServer.from_env({"CUSTOM_TOOLS": json.dumps([ICON_TOOL])})

    fetcher_cls.assert_not_called()
    browser_cls.assert_not_called()


def test_empty_storybook_url():
    with pytest.raises(ConfigurationError):
        StorybookMCPServer.from_env({"STORYBOOK_URL": ""})


def test_from_env_wires_services():
    server = StorybookMCPServer.from_env({
        "STORYBOOK_URL": "http://localhost:6006/index.json",
        "CUSTOM_TOOLS": json.dumps([ICON_TOOL]),
        "STORYBOOK_MCP_SELECTOR_TIMEOUT": "3000",
        "STORYBOOK_MCP_HEADLESS": "0",
    })

    assert server.index_fetcher.index_url == "http://localhost:6006/index.json"
    assert server.browser_service.selector_timeout == 3000
    assert server.browser_service.headless is False
    assert server.custom_tools.names() == ["getIconList"]
    assert "getIconList" in [tool.name for tool in server.mcp_service.list_tools()]


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "invalid json",
        json.dumps([{"name": "invalidTool"}, dict(ICON_TOOL, page="invalid-url")]),
    ],
)
def test_bad_custom_tools_never_block_startup(raw):
    environ = {"STORYBOOK_URL": "https://example.com/index.json"}
    if raw is not None:
        environ["CUSTOM_TOOLS"] = raw

    server = StorybookMCPServer.from_env(environ)
    assert len(server.custom_tools) == 0


def test_registers_tool_handlers_with_the_mcp_server():
    server = StorybookMCPServer.from_env({"STORYBOOK_URL": "http://localhost:6006/index.json"})

    handlers = server.mcp_service.server.request_handlers
    assert ListToolsRequest in handlers
    assert CallToolRequest in handlers
