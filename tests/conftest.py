"""Shared fixtures for browser automation tests.

Nothing here starts a real browser. ``FakePlaywright`` stands in for
``async_playwright`` and hands out a fresh MagicMock browser stack on every
``start()``, so relaunch and teardown behaviour can be asserted per stack.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastmcp import FastMCP

from browser_automation.catalog import build_catalog
from browser_automation.config import BrowserConfig
from browser_automation.dispatch import ToolDispatcher
from browser_automation.resource_filter import ResourceFilter
from browser_automation.session import BrowserSession


def make_page(url: str = "about:blank", title: str = "") -> MagicMock:
    """Create a Page double whose coroutine methods are AsyncMocks."""
    page = MagicMock()
    page.url = url
    page.goto = AsyncMock(return_value=None)
    page.title = AsyncMock(return_value=title)
    page.route = AsyncMock()
    page.click = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.wait_for_event = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.evaluate = AsyncMock()
    page.query_selector = AsyncMock()
    page.screenshot = AsyncMock()

    field = MagicMock()
    field.wait_for = AsyncMock()
    field.select_text = AsyncMock()
    field.press_sequentially = AsyncMock()
    page.locator.return_value.first = field
    return page


class FakePlaywright:
    """Callable replacement for ``async_playwright``."""

    def __init__(self):
        self.instances: list[MagicMock] = []
        self.launch_error: Exception | None = None
        self.goto_error: Exception | None = None

    def __call__(self) -> FakePlaywright:
        return self

    async def start(self) -> MagicMock:
        page = make_page()
        page.goto.side_effect = self.goto_error

        context = MagicMock()
        context.new_page = AsyncMock(return_value=page)

        browser = MagicMock()
        browser.new_context = AsyncMock(return_value=context)
        browser.close = AsyncMock()

        playwright = MagicMock()
        playwright.chromium.launch = AsyncMock(return_value=browser, side_effect=self.launch_error)
        playwright.stop = AsyncMock()
        # Handles kept on the instance for assertions
        playwright.fake_browser = browser
        playwright.fake_page = page

        self.instances.append(playwright)
        return playwright


@pytest.fixture
def mcp() -> FastMCP:
    """Create a fresh FastMCP instance for testing."""
    return FastMCP("test-server")


@pytest.fixture
def config() -> BrowserConfig:
    return BrowserConfig()


@pytest.fixture
def catalog(config: BrowserConfig):
    return build_catalog(config)


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def session(config: BrowserConfig, fake_playwright: FakePlaywright) -> BrowserSession:
    """A Closed session wired to the fake Playwright."""
    return BrowserSession(config, playwright_factory=fake_playwright)


@pytest.fixture
def page() -> MagicMock:
    return make_page(url="https://example.com/", title="Example Domain")


@pytest.fixture
def open_session(session: BrowserSession, page: MagicMock) -> BrowserSession:
    """A session put straight into the Open state around the ``page`` double."""
    session.browser = MagicMock()
    session.browser.close = AsyncMock()
    session.context = MagicMock()
    session.page = page
    session.resource_filter = ResourceFilter()
    session.generation = 1
    return session


@pytest.fixture
def dispatcher(session: BrowserSession) -> ToolDispatcher:
    return ToolDispatcher(session)
