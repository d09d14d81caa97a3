"""Browser automation configuration.

Settings come from ~/.browser-automation/configuration.json (optional) with
environment variable overrides on top. Timeouts, readiness conditions and
resource blocking differ between deployment variants; the variant is picked
once at startup and feeds the tool catalog defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Low-level config file access
# ---------------------------------------------------------------------------

CONFIG_FILE = Path.home() / ".browser-automation" / "configuration.json"

ENV_PREFIX = "BROWSER_AUTOMATION_"

# Desktop Chrome identification to reduce automation fingerprinting
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})

# Chrome flags shared between all launches
CHROME_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--no-first-run",
    "--no-default-browser-check",
)

# Extra flags for variants that also disable heavy resources in the engine
RESOURCE_SAVING_CHROME_ARGS = (
    "--blink-settings=imagesEnabled=false",
    "--disable-plugins",
    "--disable-extensions",
)


@dataclass(frozen=True)
class Variant:
    """Per-deployment defaults that differ between server flavours."""

    name: str
    selector_timeout_ms: int
    wait_until: str
    engine_resource_flags: bool


VARIANTS: dict[str, Variant] = {
    "lean": Variant(
        name="lean",
        selector_timeout_ms=15000,
        wait_until="domcontentloaded",
        engine_resource_flags=True,
    ),
    "standard": Variant(
        name="standard",
        selector_timeout_ms=30000,
        wait_until="load",
        engine_resource_flags=False,
    ),
}

DEFAULT_VARIANT = "lean"


@dataclass(frozen=True)
class BrowserConfig:
    """Immutable settings for one server process."""

    variant: Variant = field(default_factory=lambda: VARIANTS[DEFAULT_VARIANT])
    headless: bool = False
    viewport_width: int = 1920
    viewport_height: int = 1080
    user_agent: str = BROWSER_USER_AGENT
    executable_path: str | None = None
    blocked_resource_types: frozenset[str] = DEFAULT_BLOCKED_RESOURCE_TYPES
    navigation_timeout_ms: int = 60000
    response_timeout_ms: int = 30000
    type_delay_ms: int = 50

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    @property
    def chrome_args(self) -> list[str]:
        args = list(CHROME_ARGS)
        if self.variant.engine_resource_flags:
            args.extend(RESOURCE_SAVING_CHROME_ARGS)
        return args

    def with_variant(self, name: str) -> BrowserConfig:
        return replace(self, variant=get_variant(name))


def get_variant(name: str) -> Variant:
    """Look up a variant by name, raising ValueError for unknown names."""
    try:
        return VARIANTS[name]
    except KeyError:
        known = ", ".join(sorted(VARIANTS))
        raise ValueError(f"Unknown browser variant {name!r} (expected one of: {known})") from None


def read_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load the JSON configuration file, returning {} when absent or unreadable."""
    if path is None:
        override = os.environ.get(f"{ENV_PREFIX}CONFIG")
        path = Path(override) if override else CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_config(
    file_data: dict[str, Any] | None = None,
    environ: dict[str, str] | None = None,
) -> BrowserConfig:
    """
    Build the process configuration.

    Args:
        file_data: Parsed configuration file (default: read from disk)
        environ: Environment mapping (default: os.environ)

    Returns:
        BrowserConfig with file values applied, then environment overrides

    Raises:
        ValueError: If the configured variant is unknown
    """
    data = dict(read_config_file() if file_data is None else file_data)
    env = os.environ if environ is None else environ

    for key in ("variant", "headless", "user_agent", "executable_path"):
        env_value = env.get(f"{ENV_PREFIX}{key.upper()}")
        if env_value:
            data[key] = env_value

    kwargs: dict[str, Any] = {"variant": get_variant(str(data.get("variant", DEFAULT_VARIANT)))}
    if "headless" in data:
        kwargs["headless"] = _parse_bool(data["headless"])
    for key in ("viewport_width", "viewport_height"):
        if key in data:
            kwargs[key] = int(data[key])
    if data.get("user_agent"):
        kwargs["user_agent"] = str(data["user_agent"])
    if data.get("executable_path"):
        kwargs["executable_path"] = str(data["executable_path"])
    if "blocked_resource_types" in data:
        kwargs["blocked_resource_types"] = frozenset(
            str(t).lower() for t in data["blocked_resource_types"]
        )

    return BrowserConfig(**kwargs)
