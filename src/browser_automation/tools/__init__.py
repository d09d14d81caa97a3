"""
Browser tools organized by category.

Each module holds the handlers for its tools (session + typed arguments in,
ToolResult out) and a register function that exposes them on a FastMCP
server through the dispatcher:
- lifecycle: launch, close, status
- navigation: navigate
- interactions: click, type
- waits: wait for selector, response, or a fixed time
- inspection: evaluate, get_content, inspect_elements, get_events, screenshot
"""

from .inspection import HANDLERS as INSPECTION_HANDLERS, register_inspection_tools
from .interactions import HANDLERS as INTERACTION_HANDLERS, register_interaction_tools
from .lifecycle import HANDLERS as LIFECYCLE_HANDLERS, register_lifecycle_tools
from .navigation import HANDLERS as NAVIGATION_HANDLERS, register_navigation_tools
from .waits import HANDLERS as WAIT_HANDLERS, register_wait_tools

HANDLERS = {
    **LIFECYCLE_HANDLERS,
    **NAVIGATION_HANDLERS,
    **INTERACTION_HANDLERS,
    **WAIT_HANDLERS,
    **INSPECTION_HANDLERS,
}

__all__ = [
    "HANDLERS",
    "register_lifecycle_tools",
    "register_navigation_tools",
    "register_interaction_tools",
    "register_wait_tools",
    "register_inspection_tools",
]
