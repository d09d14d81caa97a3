"""
Tool dispatch - routes (tool name, argument bag) to a handler.

The dispatcher is the single catch-all boundary: every failure below it is
turned into an error ToolResult, so nothing propagates to the transport.

Public API:
    ToolDispatcher.dispatch(name, arguments) -> ToolResult
    ToolDispatcher.call(ToolCall) -> ToolResult   (used by tools/registry.py)
    ToolDispatcher.shutdown()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from playwright.async_api import Error as PlaywrightError

from .catalog import ToolDescriptor, build_catalog
from .errors import BrowserToolError, UnknownTool
from .session import BrowserSession
from .tools import HANDLERS
from .types import ToolCall, ToolResult

logger = logging.getLogger(__name__)

Handler = Callable[[BrowserSession, Any], Awaitable[ToolResult]]

# How long shutdown waits for an in-flight call before closing the browser
SHUTDOWN_LOCK_TIMEOUT_S = 5.0


class ToolDispatcher:
    """
    Executes tool calls against one BrowserSession.

    Calls are serialized with a lock: the session has a single page, and
    overlapping calls (possible over the HTTP transport) would race on it.
    """

    def __init__(
        self,
        session: BrowserSession,
        catalog: Mapping[str, ToolDescriptor] | None = None,
        handlers: Mapping[str, Handler] | None = None,
        shutdown_timeout: float = SHUTDOWN_LOCK_TIMEOUT_S,
    ):
        self.session = session
        self.catalog = dict(catalog) if catalog is not None else build_catalog(session.config)
        self.handlers = dict(handlers) if handlers is not None else dict(HANDLERS)
        missing = sorted(set(self.catalog) - set(self.handlers))
        if missing:
            raise ValueError(f"No handler registered for: {', '.join(missing)}")
        self._lock = asyncio.Lock()
        self.shutdown_timeout = shutdown_timeout

    async def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """
        Validate arguments, run the handler and normalize the outcome.

        Args:
            name: Tool name as advertised in the catalog
            arguments: Loosely-typed argument bag from the caller

        Returns:
            ToolResult; on any failure ``is_error`` is set and ``error_kind``
            names the failure
        """
        logger.info(f"tool={name}")
        try:
            descriptor = self.catalog.get(name)
            if descriptor is None:
                raise UnknownTool(name)
            args = descriptor.resolve(arguments)
            async with self._lock:
                return await self.handlers[name](self.session, args)
        except BrowserToolError as e:
            logger.warning(f"tool={name} failed: {e.kind}: {e.message}")
            return ToolResult.error(e.kind, e.message)
        except PlaywrightError as e:
            logger.warning(f"tool={name} browser error: {e.message}")
            return ToolResult.error("BrowserError", e.message)
        except Exception as e:
            logger.exception(f"tool={name} raised unexpectedly")
            return ToolResult.error("InternalError", str(e) or type(e).__name__)

    async def call(self, call: ToolCall) -> ToolResult:
        return await self.dispatch(call.name, call.arguments)

    async def shutdown(self) -> None:
        """
        Best-effort teardown on process exit; failures are logged, not raised.

        Waits up to ``shutdown_timeout`` seconds for an in-flight call to
        finish before closing the browser underneath it.
        """
        acquired = False
        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=self.shutdown_timeout)
            acquired = True
        except asyncio.TimeoutError:
            logger.warning(f"Tool call still running after {self.shutdown_timeout}s, closing anyway")
        try:
            await self.session.close()
        except Exception:
            logger.warning("Browser teardown during shutdown failed", exc_info=True)
        finally:
            if acquired:
                self._lock.release()
