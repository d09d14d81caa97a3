"""
Error kinds raised by tool handlers.

Every handler-level failure is a BrowserToolError subclass. The dispatcher
turns them into error results; nothing here ever reaches the transport as
an exception.
"""

from __future__ import annotations


class BrowserToolError(Exception):
    """Base class for failures reported back to the caller as tool errors."""

    kind = "BrowserError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotLaunched(BrowserToolError):
    kind = "NotLaunched"

    def __init__(self, message: str = "Browser not launched. Call browser_launch first."):
        super().__init__(message)


class LaunchFailure(BrowserToolError):
    kind = "LaunchFailure"


class NavigationFailure(BrowserToolError):
    kind = "NavigationFailure"


class ElementNotFound(BrowserToolError):
    kind = "ElementNotFound"


class WaitTimeout(BrowserToolError):
    """A selector, response or condition did not resolve in time."""

    kind = "Timeout"


class EvaluationError(BrowserToolError):
    kind = "EvaluationError"


class IOFailure(BrowserToolError):
    kind = "IOFailure"


class UnknownTool(BrowserToolError):
    kind = "UnknownTool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(BrowserToolError):
    kind = "InvalidArguments"
