"""Registry of operator-supplied custom tools."""

import json
import logging
from typing import Any, Iterator, List, Optional

from ..errors import CustomToolValidationError
from ..models import CustomToolDefinition

logger = logging.getLogger(__name__)


def parse_custom_tools(raw_config: Optional[str]) -> List[CustomToolDefinition]:
    """Parse the ``CUSTOM_TOOLS`` JSON array.

    Loading never fails: malformed JSON yields no tools, and each invalid
    definition is dropped on its own with a warning.

    Args:
        raw_config: Raw JSON text, or None when unset

    Returns:
        Valid definitions in input order
    """
    if raw_config is None or not raw_config.strip():
        return []

    try:
        data = json.loads(raw_config)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring CUSTOM_TOOLS: invalid JSON ({e})")
        return []

    if not isinstance(data, list):
        logger.warning(
            f"Ignoring CUSTOM_TOOLS: expected a JSON array, got {type(data).__name__}"
        )
        return []

    return validate_definitions(data)


def validate_definitions(items: List[Any]) -> List[CustomToolDefinition]:
    """Keep the valid definitions, logging one warning per dropped item."""
    tools = []
    for index, item in enumerate(items):
        try:
            tools.append(CustomToolDefinition.from_dict(item))
        except CustomToolValidationError as e:
            name = item.get("name") if isinstance(item, dict) else None
            logger.warning(
                f"Dropping custom tool #{index} ({name or 'unnamed'}): "
                f"invalid field '{e.field}': {e}"
            )
    return tools


class CustomToolRegistry:
    """Read-only collection of custom tools, looked up by exact name.

    Duplicate names are kept as configured; lookups return the first match.
    """

    def __init__(self, tools: Optional[List[CustomToolDefinition]] = None):
        self._tools = list(tools or [])

        seen = set()
        for tool in self._tools:
            if tool.name in seen:
                logger.warning(
                    f"Duplicate custom tool name '{tool.name}': only the first definition is reachable"
                )
            seen.add(tool.name)

    @classmethod
    def load(cls, raw_config: Optional[str]) -> "CustomToolRegistry":
        registry = cls(parse_custom_tools(raw_config))
        if registry:
            logger.info(f"Loaded {len(registry)} custom tool(s): {', '.join(registry.names())}")
        return registry

    def get(self, name: str) -> Optional[CustomToolDefinition]:
        for tool in self._tools:
            if tool.name == name:
                return tool
        return None

    def names(self) -> List[str]:
        return [tool.name for tool in self._tools]

    def __iter__(self) -> Iterator[CustomToolDefinition]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __bool__(self) -> bool:
        return bool(self._tools)
