"""
Browser Automation MCP Server

FastMCP server exposing the browser tools over STDIO or HTTP. One browser
session lives for the whole process; it is closed when the server shuts
down, including on Ctrl-C.

Usage:
    # Run with STDIO transport (for agent integration)
    browser-automation-server --stdio

    # Run with HTTP transport
    browser-automation-server --port 4010
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastmcp import FastMCP

from . import register_tools
from .config import BrowserConfig, load_config
from .dispatch import ToolDispatcher
from .session import BrowserSession

logger = logging.getLogger("browser_automation")


def setup_logger() -> None:
    """Configure the package logger. Logs go to stderr; stdout carries protocol frames."""
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("[browser] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(os.getenv("BROWSER_AUTOMATION_LOG_LEVEL", "INFO").upper())


def redirect_banner_to_stderr() -> None:
    """Send FastMCP's rich console output to stderr so it never mixes with STDIO frames."""
    import rich.console

    _original_console_init = rich.console.Console.__init__

    def _patched_console_init(self, *args, **kwargs):
        kwargs["file"] = sys.stderr
        _original_console_init(self, *args, **kwargs)

    rich.console.Console.__init__ = _patched_console_init


def create_server(
    config: BrowserConfig | None = None,
    session: BrowserSession | None = None,
) -> FastMCP:
    """
    Build the FastMCP server with every browser tool registered.

    Args:
        config: Process configuration (default: load_config())
        session: Session to drive (default: a new BrowserSession for config)
    """
    config = config or load_config()
    session = session or BrowserSession(config)
    dispatcher = ToolDispatcher(session)

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            # Shielded so the browser is still closed when shutdown is a cancellation
            with anyio.CancelScope(shield=True):
                await dispatcher.shutdown()

    mcp = FastMCP("browser-automation", lifespan=lifespan)
    register_tools(mcp, dispatcher)
    return mcp


# ── Entry point ───────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    """Entry point for the Browser Automation MCP server."""
    parser = argparse.ArgumentParser(description="Browser Automation MCP Server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("BROWSER_AUTOMATION_PORT", "4010")),
        help="HTTP server port (default: 4010)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="HTTP server host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Use STDIO transport instead of HTTP",
    )
    parser.add_argument(
        "--variant",
        default=None,
        help="Default set to use for timeouts and resource blocking (lean, standard)",
    )
    args = parser.parse_args(argv)

    setup_logger()
    if args.stdio:
        redirect_banner_to_stderr()

    try:
        config = load_config()
        if args.variant:
            config = config.with_variant(args.variant)
        mcp = create_server(config)

        if args.stdio:
            logger.info(f"Browser Automation MCP server running on stdio (variant={config.variant.name})")
            mcp.run(transport="stdio")
        else:
            logger.info(f"Starting Browser Automation server on {args.host}:{args.port}")
            mcp.run(transport="http", host=args.host, port=args.port)
    except KeyboardInterrupt:
        logger.info("Interrupted, browser closed")
    except Exception:
        logger.exception("Fatal error in main()")
        sys.exit(1)


if __name__ == "__main__":
    main()
