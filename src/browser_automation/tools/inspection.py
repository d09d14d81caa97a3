"""
Browser inspection tools - evaluate, get_content, inspect_elements, get_events, screenshot.

Tools for reading page state and extracting content.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP
from playwright.async_api import Error as PlaywrightError

from ..catalog import (
    INSPECT_CANDIDATE_CAP,
    EvaluateArgs,
    GetContentArgs,
    GetEventsArgs,
    InspectElementsArgs,
    ScreenshotArgs,
)
from ..errors import ElementNotFound, EvaluationError, IOFailure
from ..inspector import (
    collect_cards,
    collect_elements,
    complete_cards,
    format_cards,
    select_elements,
)
from ..session import BrowserSession
from ..types import ToolResult
from .registry import register_catalog_tools

if TYPE_CHECKING:
    from ..dispatch import ToolDispatcher

# Runs caller-supplied code unrestricted in the page. Exceptions thrown by
# that code come back as {error: message} instead of failing the call.
_EVALUATE_JS = """
(code) => {
    try {
        return eval(code);
    } catch (error) {
        return { error: error && error.message !== undefined ? error.message : String(error) };
    }
}
"""

_BODY_TEXT_JS = "() => document.body ? document.body.innerText : ''"


def truncate(text: str, limit: int) -> str:
    return text[:limit]


async def evaluate(session: BrowserSession, args: EvaluateArgs) -> ToolResult:
    page = session.require_open()
    try:
        value = await page.evaluate(_EVALUATE_JS, args.code)
    except PlaywrightError as e:
        raise EvaluationError(e.message) from e
    text = json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return ToolResult.ok(text, data=value)


async def get_content(session: BrowserSession, args: GetContentArgs) -> ToolResult:
    page = session.require_open()
    if args.selector:
        element = await page.query_selector(args.selector)
        if element is None:
            raise ElementNotFound(f"No element matches {args.selector!r}")
        content = await element.inner_text()
    else:
        content = await page.evaluate(_BODY_TEXT_JS)
    return ToolResult.ok(truncate(content or "", args.limit))


async def inspect_elements(session: BrowserSession, args: InspectElementsArgs) -> ToolResult:
    page = session.require_open()
    candidates = await collect_elements(page, args.element_types, INSPECT_CANDIDATE_CAP)
    summaries = select_elements(candidates, args.search_term, args.limit)
    return ToolResult.structured(
        f"Found {len(summaries)}:",
        [summary.to_dict() for summary in summaries],
    )


async def get_events(session: BrowserSession, args: GetEventsArgs) -> ToolResult:
    page = session.require_open()
    records = await collect_cards(page, args.container_selector, args.limit)
    cards = complete_cards(records)
    if not cards:
        return ToolResult.ok(
            f"No events with both a title and a time in {len(records)} containers", data=[]
        )
    return ToolResult.ok(format_cards(cards), data=cards)


async def screenshot(session: BrowserSession, args: ScreenshotArgs) -> ToolResult:
    page = session.require_open()
    try:
        await page.screenshot(path=args.path, full_page=args.full_page)
    except OSError as e:
        raise IOFailure(f"Cannot write screenshot to {args.path}: {e}") from e
    return ToolResult.ok(f"Saved screenshot to {args.path}")


HANDLERS = {
    "browser_evaluate": evaluate,
    "browser_get_content": get_content,
    "browser_inspect_elements": inspect_elements,
    "browser_get_events": get_events,
    "browser_screenshot": screenshot,
}


def register_inspection_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register browser inspection tools."""
    register_catalog_tools(mcp, dispatcher, HANDLERS)
