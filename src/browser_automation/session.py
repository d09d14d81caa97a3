"""
Browser session management.

Owns the single browser process and page this server drives. The session is
either Closed (no handles) or Open (browser, context and page all set).
Launching while Open tears the previous browser down first, so at most one
session ever exists. Nothing is started implicitly: every tool except launch
goes through require_open().
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    async_playwright,
)

from .config import BrowserConfig
from .errors import LaunchFailure, NotLaunched
from .resource_filter import ResourceFilter

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """
    The one browser/page pair managed by this process.

    Attributes:
        config: Process configuration (viewport, user agent, flags, timeouts)
        playwright_factory: Returns an object whose ``start()`` yields a
            Playwright instance (``async_playwright`` outside tests)
        generation: Incremented on every successful launch; a liveness marker
            that changes whenever the browser is replaced
    """

    config: BrowserConfig
    playwright_factory: Callable[[], Any] = async_playwright
    browser: Browser | None = None
    context: BrowserContext | None = None
    page: Page | None = None
    resource_filter: ResourceFilter | None = None
    generation: int = 0
    _playwright: Any = None

    @property
    def is_open(self) -> bool:
        return self.browser is not None and self.page is not None

    def require_open(self) -> Page:
        """Return the active page, or raise NotLaunched when Closed."""
        if not self.is_open:
            raise NotLaunched()
        return self.page

    async def launch(
        self,
        headless: bool,
        url: str | None = None,
        wait_until: str | None = None,
    ) -> Page:
        """
        Start a fresh browser and page, replacing any open session.

        Args:
            headless: Run the browser without a visible window
            url: Optional URL to load once the page is ready
            wait_until: Readiness condition for the initial navigation
                (default: the variant's readiness condition)

        Returns:
            The new active page

        Raises:
            LaunchFailure: If the previous browser cannot be closed or any
                launch step fails. The session is Closed afterwards.
        """
        if self.is_open:
            logger.info("Closing previous browser before relaunch")
            try:
                await self._teardown()
            except Exception as e:
                raise LaunchFailure(f"Could not close the previous browser: {e}") from e

        playwright = browser = None
        try:
            playwright = await self.playwright_factory().start()
            browser = await playwright.chromium.launch(
                headless=headless,
                args=self.config.chrome_args,
                executable_path=self.config.executable_path,
            )
            context = await browser.new_context(
                viewport=self.config.viewport,
                user_agent=self.config.user_agent,
                locale="en-US",
            )
            page = await context.new_page()

            # Filter must be in place before the first navigation
            resource_filter = ResourceFilter(self.config.blocked_resource_types)
            await resource_filter.install(page)

            if url:
                await page.goto(
                    url,
                    wait_until=wait_until or self.config.variant.wait_until,
                    timeout=self.config.navigation_timeout_ms,
                )
        except Exception as e:
            await self._discard(playwright, browser)
            raise LaunchFailure(f"Failed to launch browser: {e}") from e

        self._playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self.resource_filter = resource_filter
        self.generation += 1
        logger.info(
            f"Launched browser (generation={self.generation}, headless={headless}, "
            f"variant={self.config.variant.name})"
        )
        return page

    async def close(self) -> bool:
        """
        Close the browser if one is open.

        Returns:
            True if a browser was closed, False if the session was already Closed
        """
        if not self.is_open:
            return False
        await self._teardown()
        logger.info("Closed browser")
        return True

    async def status(self) -> dict:
        """Describe the session without changing it."""
        info: dict[str, Any] = {
            "open": self.is_open,
            "generation": self.generation,
            "variant": self.config.variant.name,
        }
        if self.is_open:
            info["url"] = self.page.url
            try:
                info["title"] = await self.page.title()
            except PlaywrightError:
                logger.debug("Could not read page title", exc_info=True)
            if self.resource_filter:
                info["requests"] = self.resource_filter.stats()
        return info

    async def _teardown(self) -> None:
        """Close browser and Playwright; the session is Closed even if closing fails."""
        browser, playwright = self.browser, self._playwright
        self.browser = None
        self.context = None
        self.page = None
        self.resource_filter = None
        self._playwright = None
        try:
            if browser:
                await browser.close()
        finally:
            if playwright:
                await playwright.stop()

    async def _discard(self, playwright: Any, browser: Browser | None) -> None:
        """Best-effort release of handles created by a launch that failed."""
        if browser:
            try:
                await browser.close()
            except Exception:
                logger.warning("Closing browser after failed launch raised", exc_info=True)
        if playwright:
            try:
                await playwright.stop()
            except Exception:
                logger.warning("Stopping Playwright after failed launch raised", exc_info=True)
