"""Execution of operator-configured custom tools."""

import json
import logging
from typing import Any, Dict, List

from mcp.types import TextContent

from ...models import CustomToolDefinition
from ..browser_service import BrowserService

logger = logging.getLogger(__name__)


def _format_item(value: Any) -> str:
    if isinstance(value, str):
        return value
    # true/false/null and nested structures render as JSON
    return json.dumps(value, ensure_ascii=False)


def format_result(value: Any) -> str:
    """Render a handler's return value as text.

    Lists are newline-joined, objects pretty-printed, scalars stringified.
    """
    if isinstance(value, list):
        return "\n".join(_format_item(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, indent=2, ensure_ascii=False)
    return _format_item(value)


class CustomToolService:
    """Runs a custom tool's handler on its configured page."""

    def __init__(self, browser_service: BrowserService):
        self.browser_service = browser_service

    async def run(
        self, tool: CustomToolDefinition, arguments: Dict[str, Any]
    ) -> List[TextContent]:
        logger.info(f"Running custom tool {tool.name} on {tool.page}")
        result = await self.browser_service.evaluate_in_page(
            tool.page, tool.handler, arguments or None
        )
        return [TextContent(type="text", text=format_result(result))]
