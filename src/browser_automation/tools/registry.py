"""
FastMCP glue - exposes catalog descriptors as MCP tools.

Each tool advertises its descriptor's own inputSchema and hands the raw
argument bag to the dispatcher, so camelCase keys, bounds and catalog
defaults behave the same over MCP as through ToolDispatcher directly.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from pydantic import Field

from ..catalog import ToolDescriptor
from ..types import ToolCall

if TYPE_CHECKING:
    from ..dispatch import ToolDispatcher


class CatalogTool(Tool):
    """An MCP tool backed by one catalog descriptor."""

    dispatcher: Any = Field(exclude=True)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: ToolDispatcher) -> CatalogTool:
        return cls(
            name=descriptor.name,
            description=descriptor.help_text(),
            parameters=descriptor.input_schema(),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        result = await self.dispatcher.call(ToolCall(self.name, dict(arguments or {})))
        if result.is_error:
            # FastMCP reports this as {content: [{type: "text", text}], isError: true}
            raise ToolError(result.text)
        return MCPToolResult(content=result.text)


def register_catalog_tools(mcp: FastMCP, dispatcher: ToolDispatcher, names: Iterable[str]) -> None:
    """Add one CatalogTool per name, using the dispatcher's descriptors."""
    for name in names:
        mcp.add_tool(CatalogTool.from_descriptor(dispatcher.catalog[name], dispatcher))
