"""
Browser interaction tools - click, type.

Both wait for the target to become visible before acting, so a missing
element is reported as ElementNotFound rather than a generic timeout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastmcp import FastMCP
from playwright.async_api import TimeoutError as PlaywrightTimeout

from ..catalog import ClickArgs, TypeArgs
from ..errors import ElementNotFound, WaitTimeout
from ..session import BrowserSession
from ..types import ToolResult
from .registry import register_catalog_tools

if TYPE_CHECKING:
    from ..dispatch import ToolDispatcher


def _not_found(selector: str, timeout: int) -> ElementNotFound:
    return ElementNotFound(f"No visible element matches {selector!r} after {timeout}ms")


async def click(session: BrowserSession, args: ClickArgs) -> ToolResult:
    page = session.require_open()
    try:
        await page.wait_for_selector(args.selector, state="visible", timeout=args.timeout)
    except PlaywrightTimeout as e:
        raise _not_found(args.selector, args.timeout) from e

    try:
        await page.click(args.selector, timeout=args.timeout)
    except PlaywrightTimeout as e:
        raise WaitTimeout(f"{args.selector!r} was not clickable within {args.timeout}ms") from e
    return ToolResult.ok(f"Clicked {args.selector}")


async def type_text(session: BrowserSession, args: TypeArgs) -> ToolResult:
    page = session.require_open()
    field = page.locator(args.selector).first
    try:
        await field.wait_for(state="visible", timeout=args.timeout)
    except PlaywrightTimeout as e:
        raise _not_found(args.selector, args.timeout) from e

    # Select the existing value so the typed text replaces it
    await field.select_text(timeout=args.timeout)
    await field.press_sequentially(args.text, delay=args.delay)
    return ToolResult.ok(f"Typed {len(args.text)} characters into {args.selector}")


HANDLERS = {
    "browser_click": click,
    "browser_type": type_text,
}


def register_interaction_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register browser interaction tools."""
    register_catalog_tools(mcp, dispatcher, HANDLERS)
