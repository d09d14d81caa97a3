"""
Tool catalog - static descriptors for every browser tool.

Each tool has a pydantic argument model. Required arguments have no default
in the model; optional arguments default to None there and are filled from
the descriptor's ``defaults`` after validation, so the defaults live in one
place and can differ per deployment variant.

Public API:
    build_catalog(config) -> dict[str, ToolDescriptor]
    ToolDescriptor.resolve(bag) -> validated, fully-defaulted arguments
    ToolDescriptor.input_schema() -> MCP inputSchema dict
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .config import BrowserConfig
from .errors import InvalidArguments

WAIT_UNTIL_VALUES = ("load", "domcontentloaded", "networkidle", "commit")

# Puppeteer readiness names accepted for compatibility
_WAIT_UNTIL_ALIASES = {"networkidle0": "networkidle", "networkidle2": "networkidle"}

DEFAULT_ELEMENT_TYPES = (
    "button",
    "input",
    "select",
    "a",
    "label",
    "div[role='checkbox']",
    "div[role='button']",
    "div[class*='picker']",
    "div[class*='calendar']",
)

DEFAULT_CONTAINER_SELECTOR = "[class*='event'], [class*='card'], [data-testid*='event']"

# Candidates enumerated in-page before filtering
INSPECT_CANDIDATE_CAP = 100


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------


class ToolArguments(BaseModel):
    """Base for per-tool argument models. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class LaunchArgs(ToolArguments):
    headless: bool | None = Field(
        default=None,
        description="Run in headless mode (true) or with a visible browser (false)",
    )
    url: str | None = Field(default=None, description="Optional initial URL to navigate to")


class NavigateArgs(ToolArguments):
    url: str = Field(description="URL to navigate to")
    wait_until: str | None = Field(
        default=None,
        description="When navigation is considered done: load, domcontentloaded, networkidle, commit",
        json_schema_extra={"enum": list(WAIT_UNTIL_VALUES)},
    )
    timeout: int | None = Field(default=None, ge=0, description="Navigation timeout in milliseconds")

    @field_validator("wait_until")
    @classmethod
    def _check_wait_until(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = _WAIT_UNTIL_ALIASES.get(value, value)
        if value not in WAIT_UNTIL_VALUES:
            raise ValueError(f"must be one of {', '.join(WAIT_UNTIL_VALUES)}")
        return value


class ClickArgs(ToolArguments):
    selector: str = Field(description="CSS selector of the element to click (e.g. '#login-btn')")
    timeout: int | None = Field(
        default=None, ge=0, description="Maximum time to wait for the element in milliseconds"
    )


class TypeArgs(ToolArguments):
    selector: str = Field(description="CSS selector of the input to type into")
    text: str = Field(description="Text to enter; replaces the current content")
    delay: int | None = Field(default=None, ge=0, description="Delay between keystrokes in milliseconds")
    timeout: int | None = Field(
        default=None, ge=0, description="Maximum time to wait for the element in milliseconds"
    )


class WaitForSelectorArgs(ToolArguments):
    selector: str = Field(description="CSS selector to wait for")
    visible: bool | None = Field(
        default=None, description="Wait for the element to be visible (not just in the DOM)"
    )
    timeout: int | None = Field(default=None, ge=0, description="Maximum time to wait in milliseconds")


class WaitForResponseArgs(ToolArguments):
    url_pattern: str = Field(description="Substring the response URL must contain")
    timeout: int | None = Field(default=None, ge=0, description="Maximum time to wait in milliseconds")


class WaitForTimeoutArgs(ToolArguments):
    timeout: int = Field(ge=0, description="Time to wait in milliseconds")


class EvaluateArgs(ToolArguments):
    code: str = Field(description="JavaScript to run in the page. The value it produces is returned.")


class GetContentArgs(ToolArguments):
    selector: str | None = Field(default=None, description="Optional CSS selector of a specific element")
    limit: int | None = Field(default=None, ge=1, description="Maximum characters to return")


class InspectElementsArgs(ToolArguments):
    search_term: str | None = Field(
        default=None,
        description="Text to look for (e.g. 'Date', 'Location'). Leave empty for all elements.",
    )
    element_types: list[str] | None = Field(
        default=None, min_length=1, description="Element selectors to enumerate"
    )
    limit: int | None = Field(default=None, ge=1, description="Maximum elements to return")


class GetEventsArgs(ToolArguments):
    container_selector: str | None = Field(
        default=None, description="CSS selector matching one container per event/card"
    )
    limit: int | None = Field(default=None, ge=1, description="Maximum containers to examine")


class ScreenshotArgs(ToolArguments):
    path: str = Field(description="File path to write the screenshot to")
    full_page: bool | None = Field(default=None, description="Capture the full scrollable page")


class NoArgs(ToolArguments):
    pass


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def _collapse_optional(prop: dict[str, Any]) -> dict[str, Any]:
    """Turn pydantic's anyOf[X, null] rendering into plain X."""
    variants = prop.pop("anyOf", None)
    if variants:
        non_null = [v for v in variants if v.get("type") != "null"]
        if len(non_null) == 1:
            prop = {**non_null[0], **prop}
        else:
            prop["anyOf"] = non_null
    prop.pop("title", None)
    if prop.get("default", ...) is None:
        prop.pop("default")
    return prop


@dataclass(frozen=True)
class ToolDescriptor:
    """Static description of one tool: name, help text, argument model, defaults."""

    name: str
    description: str
    arguments: type[ToolArguments]
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    @property
    def required(self) -> list[str]:
        return [name for name, f in self.arguments.model_fields.items() if f.is_required()]

    def help_text(self) -> str:
        """Description followed by an Args section, as advertised to agents."""
        lines = [self.description]
        fields = self.arguments.model_fields
        if fields:
            lines += ["", "Args:"]
            for name, info in fields.items():
                line = f"    {name}: {info.description}"
                if name in self.defaults:
                    line += f" (default: {self.defaults[name]!r})"
                lines.append(line)
        return "\n".join(lines)

    def input_schema(self) -> dict[str, Any]:
        """Render the argument model as an MCP inputSchema."""
        schema = self.arguments.model_json_schema(by_alias=False)
        properties = {}
        for name, prop in schema.get("properties", {}).items():
            prop = _collapse_optional(dict(prop))
            if name in self.defaults:
                prop["default"] = copy.deepcopy(self.defaults[name])
            properties[name] = prop
        result: dict[str, Any] = {"type": "object", "properties": properties}
        if self.required:
            result["required"] = self.required
        return result

    def resolve(self, bag: Mapping[str, Any] | None) -> ToolArguments:
        """
        Validate an argument bag and fill in catalog defaults.

        Raises:
            InvalidArguments: If the bag is not a mapping, misses a required
                argument, carries an unknown key or a value of the wrong type
        """
        if bag is None:
            bag = {}
        if not isinstance(bag, Mapping):
            raise InvalidArguments(f"{self.name}: arguments must be an object")
        try:
            args = self.arguments.model_validate(dict(bag))
        except ValidationError as e:
            raise InvalidArguments(f"{self.name}: {_format_validation_error(e)}") from e

        missing = {
            key: copy.deepcopy(value)
            for key, value in self.defaults.items()
            if getattr(args, key, None) is None
        }
        return args.model_copy(update=missing) if missing else args


def build_catalog(config: BrowserConfig) -> dict[str, ToolDescriptor]:
    """Create the descriptor set for *config*'s deployment variant."""
    variant = config.variant
    selector_timeout = variant.selector_timeout_ms

    descriptors = [
        ToolDescriptor(
            name="browser_launch",
            description=(
                "Launch a new browser instance. Must be called before any other operation. "
                "Launching again replaces the current browser."
            ),
            arguments=LaunchArgs,
            defaults={"headless": config.headless},
        ),
        ToolDescriptor(
            name="browser_navigate",
            description="Navigate the page to a URL.",
            arguments=NavigateArgs,
            defaults={"wait_until": variant.wait_until, "timeout": config.navigation_timeout_ms},
        ),
        ToolDescriptor(
            name="browser_click",
            description=(
                "Click an element on the page. Waits for the element to be visible first."
            ),
            arguments=ClickArgs,
            defaults={"timeout": selector_timeout},
        ),
        ToolDescriptor(
            name="browser_type",
            description=(
                "Replace the content of an input by typing text key by key."
            ),
            arguments=TypeArgs,
            defaults={"delay": config.type_delay_ms, "timeout": selector_timeout},
        ),
        ToolDescriptor(
            name="browser_wait_for_selector",
            description="Wait for an element to appear on the page.",
            arguments=WaitForSelectorArgs,
            defaults={"visible": True, "timeout": selector_timeout},
        ),
        ToolDescriptor(
            name="browser_wait_for_response",
            description="Wait for a network response whose URL contains the given substring.",
            arguments=WaitForResponseArgs,
            defaults={"timeout": config.response_timeout_ms},
        ),
        ToolDescriptor(
            name="browser_wait_for_timeout",
            description=(
                "Pause for a fixed number of milliseconds. Prefer "
                "browser_wait_for_selector or browser_wait_for_response."
            ),
            arguments=WaitForTimeoutArgs,
        ),
        ToolDescriptor(
            name="browser_evaluate",
            description=(
                "Execute JavaScript in the page and return the result as JSON. "
                "Exceptions thrown by the code are returned as {error: message}. "
                "The code runs unrestricted with the page's privileges."
            ),
            arguments=EvaluateArgs,
        ),
        ToolDescriptor(
            name="browser_get_content",
            description="Get the visible text of the page or of a specific element.",
            arguments=GetContentArgs,
            defaults={"limit": 2000},
        ),
        ToolDescriptor(
            name="browser_inspect_elements",
            description=(
                "Inspect interactive elements such as buttons, checkboxes, dropdowns and "
                "date pickers. Returns a selector, kind and label for each match."
            ),
            arguments=InspectElementsArgs,
            defaults={"search_term": "", "element_types": list(DEFAULT_ELEMENT_TYPES), "limit": 30},
        ),
        ToolDescriptor(
            name="browser_get_events",
            description="Extract title and time pairs from repeated event/card containers.",
            arguments=GetEventsArgs,
            defaults={"container_selector": DEFAULT_CONTAINER_SELECTOR, "limit": 10},
        ),
        ToolDescriptor(
            name="browser_screenshot",
            description="Save a screenshot of the current page to a file.",
            arguments=ScreenshotArgs,
            defaults={"full_page": False},
        ),
        ToolDescriptor(
            name="browser_close",
            description="Close the browser and clean up resources. Safe to call when closed.",
            arguments=NoArgs,
        ),
        ToolDescriptor(
            name="browser_status",
            description="Report whether a browser is open, with the current URL and title.",
            arguments=NoArgs,
        ),
    ]
    return {d.name: d for d in descriptors}
