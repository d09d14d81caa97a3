"""
Browser navigation tools - navigate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastmcp import FastMCP
from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeout,
)

from ..catalog import NavigateArgs
from ..errors import NavigationFailure
from ..session import BrowserSession
from ..types import ToolResult
from .registry import register_catalog_tools

if TYPE_CHECKING:
    from ..dispatch import ToolDispatcher


async def navigate(session: BrowserSession, args: NavigateArgs) -> ToolResult:
    page = session.require_open()
    try:
        await page.goto(args.url, wait_until=args.wait_until, timeout=args.timeout)
    except PlaywrightTimeout as e:
        raise NavigationFailure(
            f"Timed out after {args.timeout}ms waiting for {args.wait_until} on {args.url}"
        ) from e
    except PlaywrightError as e:
        raise NavigationFailure(f"Could not load {args.url}: {e.message}") from e

    title = await page.title()
    text = f"Navigated to {page.url}"
    if title:
        text += f" ({title})"
    return ToolResult.ok(text)


HANDLERS = {
    "browser_navigate": navigate,
}


def register_navigation_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register browser navigation tools."""
    register_catalog_tools(mcp, dispatcher, HANDLERS)
