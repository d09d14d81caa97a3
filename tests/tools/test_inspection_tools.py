"""Tests for browser inspection tools."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from browser_automation.catalog import DEFAULT_ELEMENT_TYPES, INSPECT_CANDIDATE_CAP
from browser_automation.errors import ElementNotFound, EvaluationError, IOFailure
from browser_automation.tools.inspection import (
    evaluate,
    get_content,
    get_events,
    inspect_elements,
    screenshot,
)


class TestEvaluate:
    @pytest.mark.asyncio
    async def test_scalar(self, open_session, page, catalog):
        page.evaluate.return_value = 2

        result = await evaluate(open_session, catalog["browser_evaluate"].resolve({"code": "1 + 1"}))

        assert result.text == "2"
        assert page.evaluate.await_args.args[1] == "1 + 1"

    @pytest.mark.asyncio
    async def test_object_pretty_printed(self, open_session, page, catalog):
        page.evaluate.return_value = {"title": "Example", "links": 3}

        result = await evaluate(open_session, catalog["browser_evaluate"].resolve({"code": "x"}))

        assert result.text == json.dumps({"title": "Example", "links": 3}, indent=2)

    @pytest.mark.asyncio
    async def test_thrown_error_is_a_value(self, open_session, page, catalog):
        page.evaluate.return_value = {"error": "boom is not defined"}

        result = await evaluate(open_session, catalog["browser_evaluate"].resolve({"code": "boom"}))

        assert not result.is_error
        assert json.loads(result.text) == {"error": "boom is not defined"}

    @pytest.mark.asyncio
    async def test_protocol_failure(self, open_session, page, catalog):
        page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")

        with pytest.raises(EvaluationError, match="context was destroyed"):
            await evaluate(open_session, catalog["browser_evaluate"].resolve({"code": "1"}))


class TestGetContent:
    @pytest.mark.asyncio
    async def test_body_text_truncated(self, open_session, page, catalog):
        page.evaluate.return_value = "a" * 3000

        result = await get_content(open_session, catalog["browser_get_content"].resolve({}))

        assert result.text == "a" * 2000

    @pytest.mark.asyncio
    async def test_selector(self, open_session, page, catalog):
        element = MagicMock()
        element.inner_text = AsyncMock(return_value="Upcoming events")
        page.query_selector.return_value = element
        args = catalog["browser_get_content"].resolve({"selector": "main", "limit": 8})

        result = await get_content(open_session, args)

        assert result.text == "Upcoming"
        page.query_selector.assert_awaited_once_with("main")

    @pytest.mark.asyncio
    async def test_missing_selector(self, open_session, page, catalog):
        page.query_selector.return_value = None
        args = catalog["browser_get_content"].resolve({"selector": "#absent"})

        with pytest.raises(ElementNotFound, match="#absent"):
            await get_content(open_session, args)


class TestInspectElements:
    @pytest.mark.asyncio
    async def test_filters_and_summarizes(self, open_session, page, catalog):
        page.evaluate.return_value = [
            {"tag": "button", "id": "date-btn", "text": "Pick Date", "className": "btn"},
            {"tag": "a", "text": "Home", "className": "nav"},
            {"tag": "input", "type": "checkbox", "id": "free", "labelText": "Free only", "checked": True},
        ]
        args = catalog["browser_inspect_elements"].resolve({"searchTerm": "date"})

        result = await inspect_elements(open_session, args)

        header, body = result.text.split("\n", 1)
        assert header == "Found 1:"
        assert json.loads(body) == [
            {"text": "Pick Date", "type": "button", "selector": "#date-btn", "className": "btn", "id": "date-btn"}
        ]
        selector, cap = page.evaluate.await_args.args[1]
        assert selector == ", ".join(DEFAULT_ELEMENT_TYPES)
        assert cap == INSPECT_CANDIDATE_CAP

    @pytest.mark.asyncio
    async def test_nothing_found(self, open_session, page, catalog):
        page.evaluate.return_value = []

        result = await inspect_elements(open_session, catalog["browser_inspect_elements"].resolve({}))

        assert result.text == "Found 0:\n[]"


class TestGetEvents:
    @pytest.mark.asyncio
    async def test_complete_cards_only(self, open_session, page, catalog):
        page.evaluate.return_value = [
            {"title": "Jazz Night", "time": "Fri 8pm"},
            {"title": "Sold out", "time": None},
        ]

        result = await get_events(open_session, catalog["browser_get_events"].resolve({}))

        assert result.text == "**Jazz Night**\n**Fri 8pm**"
        assert page.evaluate.await_args.args[1][:2] == [
            "[class*='event'], [class*='card'], [data-testid*='event']",
            10,
        ]

    @pytest.mark.asyncio
    async def test_no_complete_cards(self, open_session, page, catalog):
        page.evaluate.return_value = [{"title": "Sold out", "time": None}]

        result = await get_events(open_session, catalog["browser_get_events"].resolve({}))

        assert not result.is_error
        assert result.text == "No events with both a title and a time in 1 containers"


class TestScreenshot:
    @pytest.mark.asyncio
    async def test_writes_file(self, open_session, page, catalog, tmp_path):
        path = str(tmp_path / "shot.png")

        result = await screenshot(open_session, catalog["browser_screenshot"].resolve({"path": path}))

        assert result.text == f"Saved screenshot to {path}"
        page.screenshot.assert_awaited_once_with(path=path, full_page=False)

    @pytest.mark.asyncio
    async def test_unwritable_path(self, open_session, page, catalog):
        page.screenshot.side_effect = PermissionError("denied")
        args = catalog["browser_screenshot"].resolve({"path": "/root-only/shot.png", "fullPage": True})

        with pytest.raises(IOFailure, match="/root-only/shot.png"):
            await screenshot(open_session, args)
