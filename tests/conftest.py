"""Shared fixtures: a fake Playwright that records what the service does."""

import asyncio
from typing import Any, Dict, List, Optional, Set

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from storybook_mcp.services.browser_service import BrowserService

PROPS_HTML = "<tr><td>prop</td></tr>"


class FakePage:
    def __init__(self, env: "FakeBrowserEnv", number: int):
        self.env = env
        self.number = number
        self.url: Optional[str] = None
        self.closed = False

    async def goto(self, url: str, wait_until: str = None, **kwargs) -> None:
        self.env.events.append(f"goto:{url}")
        if url in self.env.hanging_urls:
            await asyncio.sleep(60)
        if url in self.env.goto_errors:
            raise self.env.goto_errors[url]
        self.url = url

    async def wait_for_selector(self, selector: str, timeout: int = None) -> None:
        self.env.events.append(f"wait_for_selector:{selector}")
        if self.url in self.env.missing_tables:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    async def inner_html(self, selector: str) -> str:
        if self.env.inner_html_error is not None:
            raise self.env.inner_html_error
        return self.env.html_by_url.get(self.url, PROPS_HTML)

    async def wait_for_timeout(self, timeout: float) -> None:
        self.env.events.append(f"wait_for_timeout:{timeout}")

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.env.evaluations.append((expression, arg))
        if self.env.evaluate_error is not None:
            raise self.env.evaluate_error
        return self.env.evaluate_result

    async def close(self) -> None:
        self.closed = True
        self.env.events.append(f"page_close:{self.number}")
        if self.env.page_close_error is not None:
            raise self.env.page_close_error


class FakeBrowser:
    def __init__(self, env: "FakeBrowserEnv"):
        self.env = env

    async def new_page(self) -> FakePage:
        page = FakePage(self.env, len(self.env.pages) + 1)
        self.env.pages.append(page)
        self.env.events.append(f"page_open:{page.number}")
        return page

    async def close(self) -> None:
        self.env.close_count += 1
        self.env.events.append("browser_close")
        if self.env.browser_close_error is not None:
            raise self.env.browser_close_error


class FakeChromium:
    def __init__(self, env: "FakeBrowserEnv"):
        self.env = env

    async def launch(self, headless: bool = True, **kwargs) -> FakeBrowser:
        self.env.launch_count += 1
        self.env.launch_kwargs.append({"headless": headless, **kwargs})
        if self.env.launch_error is not None:
            raise self.env.launch_error
        self.env.events.append("browser_launch")
        return FakeBrowser(self.env)


class FakePlaywright:
    def __init__(self, env: "FakeBrowserEnv"):
        self.chromium = FakeChromium(env)

    async def __aenter__(self) -> "FakePlaywright":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None


class FakeBrowserEnv:
    """Scripted browser behaviour plus a log of every call made."""

    def __init__(self):
        self.events: List[str] = []
        self.pages: List[FakePage] = []
        self.launch_count = 0
        self.close_count = 0
        self.launch_kwargs: List[Dict[str, Any]] = []
        self.launch_error: Optional[Exception] = None
        self.goto_errors: Dict[str, Exception] = {}
        self.hanging_urls: Set[str] = set()
        self.missing_tables: Set[str] = set()
        self.html_by_url: Dict[str, str] = {}
        self.evaluations: List[tuple] = []
        self.evaluate_result: Any = None
        self.evaluate_error: Optional[Exception] = None
        self.inner_html_error: Optional[Exception] = None
        self.page_close_error: Optional[Exception] = None
        self.browser_close_error: Optional[Exception] = None

    def factory(self) -> FakePlaywright:
        return FakePlaywright(self)

    def fail_navigation(self, url: str, message: str = "net::ERR_CONNECTION_REFUSED") -> None:
        self.goto_errors[url] = PlaywrightError(message)


@pytest.fixture
def browser_env() -> FakeBrowserEnv:
    return FakeBrowserEnv()


@pytest.fixture
def browser_service(browser_env) -> BrowserService:
    return BrowserService(
        selector_timeout=10000,
        settle_delay=2000,
        operation_timeout=5000,
        playwright_factory=browser_env.factory,
    )


@pytest.fixture
def v3_index_document() -> Dict[str, Any]:
    return {
        "v": 3,
        "stories": {
            "a": {
                "id": "button--primary",
                "title": "Button",
                "name": "Primary",
                "importPath": "src/Button.tsx",
                "kind": "Components/Button",
                "story": "Primary",
                "parameters": {"__id": "a", "docsOnly": False, "fileName": "src/Button.tsx"},
            },
            "b": {
                "id": "input--default",
                "title": "Input",
                "name": "Default",
                "importPath": "src/Input.tsx",
                "kind": "Components/Input",
                "story": "Default",
                "parameters": {"__id": "b", "docsOnly": False, "fileName": "src/Input.tsx"},
            },
            "c": {
                "id": "button--secondary",
                "title": "Button",
                "name": "Secondary",
                "importPath": "src/Button.tsx",
                "kind": "Components/Button",
                "story": "Secondary",
                "parameters": {"__id": "c", "docsOnly": False, "fileName": "src/Button.tsx"},
            },
            "d": {
                "id": "other--docs",
                "title": "Other",
                "name": "Docs",
                "importPath": "src/Other.tsx",
                "kind": "Components/Other",
                "story": "Docs",
                "parameters": {"__id": "d", "docsOnly": True, "fileName": "src/Other.tsx"},
            },
        },
    }


@pytest.fixture
def v5_index_document() -> Dict[str, Any]:
    return {
        "v": 5,
        "entries": {
            "a": {"type": "docs", "title": "Button", "id": "button--docs"},
            "b": {"type": "docs", "title": "Input", "id": "input--docs"},
            "c": {"type": "docs", "title": "Button", "id": "button--docs-2"},
            "d": {"type": "story", "title": "Other", "id": "other--default"},
        },
    }
