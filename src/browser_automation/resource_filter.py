"""
Network resource filter installed on every launched page.

Intercepts all outbound requests and aborts the resource categories the
caller never consumes (images, stylesheets, fonts, media by default). Every
other category (documents, scripts, xhr/fetch, websockets) continues
unmodified. The predicate stays active for the lifetime of the page.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from playwright.async_api import Page, Route

from .config import DEFAULT_BLOCKED_RESOURCE_TYPES

logger = logging.getLogger(__name__)

ROUTE_PATTERN = "**/*"


class ResourceFilter:
    """Per-request allow/abort policy keyed on Playwright's resource type."""

    def __init__(self, blocked_types: Iterable[str] = DEFAULT_BLOCKED_RESOURCE_TYPES):
        self.blocked_types = frozenset(t.lower() for t in blocked_types)
        self.blocked = 0
        self.allowed = 0

    def should_block(self, resource_type: str) -> bool:
        return resource_type.lower() in self.blocked_types

    async def install(self, page: Page) -> None:
        """Route every request of *page* through this filter."""
        await page.route(ROUTE_PATTERN, self.handle)

    async def handle(self, route: Route) -> None:
        resource_type = route.request.resource_type
        if self.should_block(resource_type):
            self.blocked += 1
            await route.abort()
        else:
            self.allowed += 1
            # Hand on to any later route handler, else to the network
            await route.fallback()

    def stats(self) -> dict[str, int]:
        return {"blocked": self.blocked, "allowed": self.allowed}
