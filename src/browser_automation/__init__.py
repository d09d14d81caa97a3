"""
Browser Automation - a remote-controllable browser session for tool-calling agents.

Provides one Playwright-driven browser page behind a small set of MCP tools:
- Lifecycle: browser_launch, browser_close, browser_status
- Navigation: browser_navigate
- Interactions: browser_click, browser_type
- Waits: browser_wait_for_selector, browser_wait_for_response, browser_wait_for_timeout
- Inspection: browser_evaluate, browser_get_content, browser_inspect_elements,
              browser_get_events, browser_screenshot

Every page blocks images, stylesheets, fonts and media by default.

Example usage:
    from fastmcp import FastMCP
    from browser_automation import BrowserSession, ToolDispatcher, load_config, register_tools

    mcp = FastMCP("browser-automation")
    dispatcher = ToolDispatcher(BrowserSession(load_config()))
    register_tools(mcp, dispatcher)
"""

from fastmcp import FastMCP

from .catalog import ToolDescriptor, build_catalog
from .config import BrowserConfig, load_config
from .dispatch import ToolDispatcher
from .errors import BrowserToolError
from .session import BrowserSession
from .tools import (
    register_inspection_tools,
    register_interaction_tools,
    register_lifecycle_tools,
    register_navigation_tools,
    register_wait_tools,
)
from .types import ToolCall, ToolResult


def register_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """
    Register all browser tools with the MCP server.

    Tool names, descriptions and argument defaults come from the dispatcher's
    catalog, so the advertised schema matches what the dispatcher enforces.
    """
    register_lifecycle_tools(mcp, dispatcher)
    register_navigation_tools(mcp, dispatcher)
    register_interaction_tools(mcp, dispatcher)
    register_wait_tools(mcp, dispatcher)
    register_inspection_tools(mcp, dispatcher)


__all__ = [
    # Main registration function
    "register_tools",
    # Core objects
    "BrowserSession",
    "ToolDispatcher",
    "ToolDescriptor",
    "build_catalog",
    # Configuration
    "BrowserConfig",
    "load_config",
    # Value types
    "ToolCall",
    "ToolResult",
    "BrowserToolError",
]
