"""Headless browser automation for Storybook docs pages and custom tools.

Every call launches its own Chromium through Playwright and tears it down
before returning. Pages and the browser are scoped resources: a page is
always closed before its browser, and the browser is always closed before
the call returns, whatever happened in between.

Page operation sequence for a props lookup:

    launch -> new page -> goto (networkidle) -> wait for props table
           -> read innerHTML -> close page -> close browser

Batch lookups share one browser and open one page per component, one at a
time. A failing component is recorded and the batch moves on.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config import DEFAULT_OPERATION_TIMEOUT, DEFAULT_SELECTOR_TIMEOUT, DEFAULT_SETTLE_DELAY
from ..errors import (
    BrowserOperationError,
    ExtractionFailedError,
    ExtractionTimeoutError,
    HandlerExecutionError,
    NavigationFailedError,
    StorybookMCPError,
)

logger = logging.getLogger(__name__)

# Storybook's ArgsTable on a docs page
PROPS_TABLE_SELECTOR = "table.docblock-argstable"


async def _close_quietly(resource, kind: str) -> None:
    """Close a page or browser; a failed close never replaces the call's outcome."""
    try:
        await resource.close()
    except PlaywrightError as e:
        logger.warning(f"Failed to close {kind}: {e}")


@dataclass
class BatchResult:
    """Per-name outcome of a batch props lookup.

    Every requested name ends up in exactly one of ``results`` or ``errors``.
    """

    names: List[str]
    results: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> int:
        return len(self.errors)


class BrowserService:
    """Runs page operations against a short-lived headless Chromium."""

    def __init__(
        self,
        headless: bool = True,
        selector_timeout: int = DEFAULT_SELECTOR_TIMEOUT,
        settle_delay: int = DEFAULT_SETTLE_DELAY,
        operation_timeout: int = DEFAULT_OPERATION_TIMEOUT,
        playwright_factory: Callable = async_playwright,
    ):
        """Initialize browser service.

        Args:
            headless: Launch Chromium without a window
            selector_timeout: Props table wait in milliseconds
            settle_delay: Delay before a custom handler runs, in milliseconds
            operation_timeout: Bound on one page operation, in milliseconds
            playwright_factory: Returns an async Playwright context manager
        """
        self.headless = headless
        self.selector_timeout = selector_timeout
        self.settle_delay = settle_delay
        self.operation_timeout = operation_timeout
        self._playwright_factory = playwright_factory

    # ========================================================================
    # Resource scopes
    # ========================================================================

    @asynccontextmanager
    async def _launch_browser(self) -> AsyncIterator[Browser]:
        async with self._playwright_factory() as playwright:
            try:
                browser = await playwright.chromium.launch(headless=self.headless)
            except PlaywrightError as e:
                raise BrowserOperationError(f"Failed to launch browser: {e}") from e

            logger.debug("Browser launched")
            try:
                yield browser
            finally:
                await _close_quietly(browser, "browser")
                logger.debug("Browser closed")

    @asynccontextmanager
    async def _open_page(self, browser: Browser) -> AsyncIterator[Page]:
        page = await browser.new_page()
        try:
            yield page
        finally:
            await _close_quietly(page, "page")

    async def _bounded(self, coro, description: str):
        """Await ``coro`` within the operation timeout."""
        seconds = self.operation_timeout / 1000
        try:
            return await asyncio.wait_for(coro, timeout=seconds)
        except asyncio.TimeoutError as e:
            raise BrowserOperationError(
                f"{description} timed out after {seconds:g}s"
            ) from e

    # ========================================================================
    # Page steps
    # ========================================================================

    async def _navigate(self, page: Page, url: str) -> None:
        logger.debug(f"Navigating to {url}")
        try:
            await page.goto(url, wait_until="networkidle")
        except PlaywrightError as e:
            raise NavigationFailedError(f"Failed to load page {url}: {e}") from e

    async def _extract_props_table(self, page: Page, url: str) -> str:
        await self._navigate(page, url)
        try:
            await page.wait_for_selector(PROPS_TABLE_SELECTOR, timeout=self.selector_timeout)
        except PlaywrightTimeoutError as e:
            raise ExtractionTimeoutError(
                f"Props table did not render within {self.selector_timeout}ms "
                f"(component may have no props, or the docs page layout changed)"
            ) from e
        try:
            return await page.inner_html(PROPS_TABLE_SELECTOR)
        except PlaywrightError as e:
            raise ExtractionFailedError(f"Failed to read props table from {url}: {e}") from e

    # ========================================================================
    # Operations
    # ========================================================================

    async def get_props_table(self, url: str) -> str:
        """Return the inner HTML of the props table on one docs page.

        Raises:
            NavigationFailedError: If the page cannot be loaded
            ExtractionTimeoutError: If the props table never renders
            ExtractionFailedError: If the rendered table cannot be read
            BrowserOperationError: If the browser fails or the operation times out
        """
        async with self._launch_browser() as browser:
            async with self._open_page(browser) as page:
                return await self._bounded(
                    self._extract_props_table(page, url), f"Loading {url}"
                )

    async def get_props_tables(
        self, names: List[str], resolve_url: Callable[[str], str]
    ) -> BatchResult:
        """Extract props tables for several components with one browser.

        Args:
            names: Component names, in the order the caller wants them back
            resolve_url: Maps a component name to its docs URL; may raise
                ComponentNotFoundError

        Returns:
            BatchResult with one result or error per unique name
        """
        batch = BatchResult(names=list(names))
        pending = list(dict.fromkeys(names))

        async with self._launch_browser() as browser:
            for name in pending:
                try:
                    url = resolve_url(name)
                    async with self._open_page(browser) as page:
                        html = await self._bounded(
                            self._extract_props_table(page, url), f"Loading {url}"
                        )
                    batch.results[name] = html
                except (StorybookMCPError, PlaywrightError) as e:
                    logger.warning(f"Props lookup failed for {name}: {e}")
                    batch.errors[name] = str(e)

        logger.debug(
            f"Batch props lookup finished: {len(batch.results)} ok, {batch.failed} failed"
        )
        return batch

    async def evaluate_in_page(
        self, page_url: str, script: str, arg: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Run ``script`` in the context of ``page_url`` and return its value.

        The script runs with the page's full privileges; the only isolation
        is the browser's own.

        Raises:
            NavigationFailedError: If the page cannot be loaded
            HandlerExecutionError: If the script throws
        """
        async with self._launch_browser() as browser:
            async with self._open_page(browser) as page:
                return await self._bounded(
                    self._run_script(page, page_url, script, arg), f"Running script on {page_url}"
                )

    async def _run_script(
        self, page: Page, page_url: str, script: str, arg: Optional[Dict[str, Any]]
    ) -> Any:
        await self._navigate(page, page_url)

        # No known selector on arbitrary pages; give client-side rendering time
        await page.wait_for_timeout(self.settle_delay)

        try:
            if arg:
                return await page.evaluate(script, arg)
            return await page.evaluate(script)
        except PlaywrightError as e:
            raise HandlerExecutionError(f"Handler execution failed: {e}") from e
