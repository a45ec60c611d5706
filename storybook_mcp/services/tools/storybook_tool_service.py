"""Built-in Storybook tools: component list and props lookups."""

import logging
from typing import List

from mcp.types import TextContent

from ...errors import StorybookMCPError
from ..browser_service import BatchResult, BrowserService
from ..index_fetcher import StorybookIndexFetcher

logger = logging.getLogger(__name__)


def format_batch(batch: BatchResult) -> str:
    """One ``### <name>`` section per requested name, in request order."""
    sections = []
    for name in batch.names:
        if name in batch.results:
            body = batch.results[name]
        else:
            body = f"Error: {batch.errors.get(name, 'no result')}"
        sections.append(f"### {name}\n\n{body}")
    return "\n\n".join(sections)


class StorybookToolService:
    """Handlers for getComponentList, getComponentPropsType and getComponentsProps."""

    def __init__(self, index_fetcher: StorybookIndexFetcher, browser_service: BrowserService):
        self.index_fetcher = index_fetcher
        self.browser_service = browser_service

    @property
    def index_url(self) -> str:
        return self.index_fetcher.index_url

    async def get_component_list(self) -> List[TextContent]:
        try:
            index = await self.index_fetcher.fetch()
        except StorybookMCPError as e:
            raise StorybookMCPError(f"Failed to get component list: {e}") from e

        components = index.list_components()
        logger.debug(f"Storybook v{index.version} index lists {len(components)} component(s)")
        return [
            TextContent(
                type="text",
                text="Available components:\n" + "\n".join(components),
            )
        ]

    async def get_component_props(self, component_name: str) -> List[TextContent]:
        try:
            index = await self.index_fetcher.fetch()
            url = index.resolve_doc_url(component_name, self.index_url)
            props_table = await self.browser_service.get_props_table(url)
        except StorybookMCPError as e:
            raise StorybookMCPError(f"Failed to get component props: {e}") from e

        return [
            TextContent(
                type="text",
                text=f'Props information for component "{component_name}":\n\n{props_table}',
            )
        ]

    async def get_components_props(self, component_names: List[str]) -> List[TextContent]:
        try:
            index = await self.index_fetcher.fetch()
        except StorybookMCPError as e:
            raise StorybookMCPError(f"Failed to get component props: {e}") from e

        batch = await self.browser_service.get_props_tables(
            component_names,
            lambda name: index.resolve_doc_url(name, self.index_url),
        )
        return [TextContent(type="text", text=format_batch(batch))]
