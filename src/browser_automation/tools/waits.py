"""
Browser wait tools - wait for a selector, a network response, or a fixed time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastmcp import FastMCP
from playwright.async_api import TimeoutError as PlaywrightTimeout

from ..catalog import WaitForResponseArgs, WaitForSelectorArgs, WaitForTimeoutArgs
from ..errors import WaitTimeout
from ..session import BrowserSession
from ..types import ToolResult
from .registry import register_catalog_tools

if TYPE_CHECKING:
    from ..dispatch import ToolDispatcher


async def wait_for_selector(session: BrowserSession, args: WaitForSelectorArgs) -> ToolResult:
    page = session.require_open()
    state = "visible" if args.visible else "attached"
    try:
        await page.wait_for_selector(args.selector, state=state, timeout=args.timeout)
    except PlaywrightTimeout as e:
        raise WaitTimeout(f"{args.selector!r} not {state} after {args.timeout}ms") from e
    return ToolResult.ok(f"Found {args.selector}")


async def wait_for_response(session: BrowserSession, args: WaitForResponseArgs) -> ToolResult:
    page = session.require_open()
    pattern = args.url_pattern
    try:
        response = await page.wait_for_event(
            "response",
            predicate=lambda r: pattern in r.url,
            timeout=args.timeout,
        )
    except PlaywrightTimeout as e:
        raise WaitTimeout(f"No response matching {pattern!r} within {args.timeout}ms") from e
    return ToolResult.ok(f"Response {response.status} {response.url}")


async def wait_for_timeout(session: BrowserSession, args: WaitForTimeoutArgs) -> ToolResult:
    page = session.require_open()
    await page.wait_for_timeout(args.timeout)
    return ToolResult.ok(f"Waited {args.timeout}ms")


HANDLERS = {
    "browser_wait_for_selector": wait_for_selector,
    "browser_wait_for_response": wait_for_response,
    "browser_wait_for_timeout": wait_for_timeout,
}


def register_wait_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register browser wait tools."""
    register_catalog_tools(mcp, dispatcher, HANDLERS)
