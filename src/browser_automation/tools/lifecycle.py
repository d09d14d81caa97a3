"""
Browser lifecycle tools - launch, close, status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastmcp import FastMCP

from ..catalog import LaunchArgs, NoArgs
from ..session import BrowserSession
from ..types import ToolResult
from .registry import register_catalog_tools

if TYPE_CHECKING:
    from ..dispatch import ToolDispatcher


async def launch(session: BrowserSession, args: LaunchArgs) -> ToolResult:
    await session.launch(headless=args.headless, url=args.url)
    return ToolResult.ok(f"Launched at {args.url}" if args.url else "Launched")


async def close(session: BrowserSession, args: NoArgs) -> ToolResult:
    if await session.close():
        return ToolResult.ok("Closed")
    return ToolResult.ok("Closed (no browser was open)")


async def status(session: BrowserSession, args: NoArgs) -> ToolResult:
    info = await session.status()
    return ToolResult.structured("", info)


HANDLERS = {
    "browser_launch": launch,
    "browser_close": close,
    "browser_status": status,
}


def register_lifecycle_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register browser lifecycle tools."""
    register_catalog_tools(mcp, dispatcher, HANDLERS)
