"""Tests for browser lifecycle tools (FastMCP)."""

import json

import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError
from playwright.async_api import Error as PlaywrightError

from browser_automation import register_tools
from browser_automation.dispatch import ToolDispatcher


@pytest.fixture
def browser_mcp(mcp: FastMCP, session) -> FastMCP:
    """FastMCP server with every browser tool registered against the fake session."""
    register_tools(mcp, ToolDispatcher(session))
    return mcp


async def _call(mcp: FastMCP, name: str, arguments: dict | None = None) -> str:
    async with Client(mcp) as client:
        result = await client.call_tool(name, arguments or {})
    return result.content[0].text


class TestLaunch:
    @pytest.mark.asyncio
    async def test_launch(self, browser_mcp, fake_playwright):
        result = await _call(browser_mcp, "browser_launch", {"headless": True})

        assert result == "Launched"
        assert fake_playwright.instances[0].chromium.launch.await_args.kwargs["headless"] is True

    @pytest.mark.asyncio
    async def test_launch_with_url(self, browser_mcp, fake_playwright):
        result = await _call(browser_mcp, "browser_launch", {"headless": True, "url": "https://example.com/"})

        assert result == "Launched at https://example.com/"
        page = fake_playwright.instances[0].fake_page
        assert page.goto.await_args.args[0] == "https://example.com/"

    @pytest.mark.asyncio
    async def test_headless_defaults_to_config(self, browser_mcp, fake_playwright):
        await _call(browser_mcp, "browser_launch")
        assert fake_playwright.instances[0].chromium.launch.await_args.kwargs["headless"] is False

    @pytest.mark.asyncio
    async def test_launch_failure(self, browser_mcp, fake_playwright):
        fake_playwright.launch_error = PlaywrightError("no chromium")

        with pytest.raises(ToolError, match="LaunchFailure: Failed to launch browser: no chromium"):
            await _call(browser_mcp, "browser_launch", {"headless": True})


class TestCloseAndStatus:
    @pytest.mark.asyncio
    async def test_close_twice(self, browser_mcp):
        async with Client(browser_mcp) as client:
            await client.call_tool("browser_launch", {"headless": True})
            first = await client.call_tool("browser_close", {})
            second = await client.call_tool("browser_close", {})

        assert first.content[0].text == "Closed"
        assert second.content[0].text == "Closed (no browser was open)"
        assert not second.is_error

    @pytest.mark.asyncio
    async def test_status_tracks_generation(self, browser_mcp):
        async with Client(browser_mcp) as client:
            await client.call_tool("browser_launch", {"headless": True})
            await client.call_tool("browser_launch", {"headless": True})
            result = await client.call_tool("browser_status", {})

        status = json.loads(result.content[0].text)
        assert status["open"] is True
        assert status["generation"] == 2
        assert status["variant"] == "lean"
