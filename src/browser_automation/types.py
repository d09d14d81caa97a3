"""Call and result value types passed between the transport and the dispatcher."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolCall:
    """One inbound invocation: tool name plus a loosely-typed argument bag."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResult:
    """Outcome of a single tool call."""

    text: str
    is_error: bool = False
    error_kind: str | None = None
    data: Any = None

    @classmethod
    def ok(cls, text: str, data: Any = None) -> ToolResult:
        return cls(text=text, data=data)

    @classmethod
    def structured(cls, header: str, data: Any) -> ToolResult:
        """Text result whose body is the pretty-printed JSON of *data*."""
        body = json.dumps(data, indent=2, ensure_ascii=False)
        return cls(text=f"{header}\n{body}" if header else body, data=data)

    @classmethod
    def error(cls, kind: str, message: str) -> ToolResult:
        return cls(text=f"{kind}: {message}", is_error=True, error_kind=kind)
