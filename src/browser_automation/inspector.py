"""
DOM inspection heuristics.

The in-page scripts only collect raw facts (tag, attributes, text) and return
plain data. Everything that decides something (search filtering, label
choice, selector derivation, dropping incomplete event cards) happens in the
pure functions below, so it can be exercised against hand-built records
without a browser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from playwright.async_api import Page

LABEL_MAX_CHARS = 50

TITLE_SELECTOR = 'h1, h2, h3, h4, [class*="title"], [class*="name"]'
TIME_SELECTOR = '[class*="time"], [class*="date"], time, [datetime]'

# ---------------------------------------------------------------------------
# In-page scripts
# ---------------------------------------------------------------------------

_COLLECT_ELEMENTS_JS = r"""
([selector, cap]) => {
    return Array.from(document.querySelectorAll(selector)).slice(0, cap).map(el => {
        const role = el.getAttribute('role');
        const firstClass = (el.getAttribute('class') || '').trim().split(/\s+/)[0];
        const isCheckbox = el.type === 'checkbox' || role === 'checkbox';
        let labelText = null;
        if (isCheckbox && el.id) {
            const label = document.querySelector('label[for="' + CSS.escape(el.id) + '"]');
            labelText = label ? (label.textContent || '') : null;
        }
        return {
            tag: el.tagName.toLowerCase(),
            type: typeof el.type === 'string' ? el.type : null,
            role: role,
            id: el.id || '',
            selectorId: el.id ? CSS.escape(el.id) : '',
            selectorClass: firstClass ? CSS.escape(firstClass) : '',
            className: el.getAttribute('class') || '',
            ariaLabel: el.getAttribute('aria-label'),
            text: el.textContent || '',
            labelText: labelText,
            checked: typeof el.checked === 'boolean' ? el.checked : null,
            ariaChecked: el.getAttribute('aria-checked'),
        };
    });
}
"""

_COLLECT_CARDS_JS = """
([selector, limit, titleSelector, timeSelector]) => {
    const textOf = (el) => el ? (el.textContent || '').trim() : null;
    return Array.from(document.querySelectorAll(selector)).slice(0, limit).map(card => ({
        title: textOf(card.querySelector(titleSelector)),
        time: textOf(card.querySelector(timeSelector)),
    }));
}
"""


# ---------------------------------------------------------------------------
# Element summarization
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ElementFacts:
    """Raw attributes of one candidate element as read from the page."""

    tag: str
    type: str | None = None
    role: str | None = None
    id: str = ""
    selector_id: str = ""
    selector_class: str = ""
    class_name: str = ""
    aria_label: str | None = None
    text: str = ""
    label_text: str | None = None
    checked: bool | None = None
    aria_checked: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ElementFacts:
        return cls(
            tag=str(raw.get("tag") or ""),
            type=raw.get("type") or None,
            role=raw.get("role") or None,
            id=raw.get("id") or "",
            selector_id=raw.get("selectorId") or "",
            selector_class=raw.get("selectorClass") or "",
            class_name=raw.get("className") or "",
            aria_label=raw.get("ariaLabel") or None,
            text=raw.get("text") or "",
            label_text=raw.get("labelText"),
            checked=raw.get("checked"),
            aria_checked=raw.get("ariaChecked"),
        )

    @property
    def is_checkbox(self) -> bool:
        return self.type == "checkbox" or self.role == "checkbox"


@dataclass(frozen=True)
class ElementSummary:
    selector: str
    kind: str
    text: str
    class_name: str
    id: str
    is_checkbox: bool = False
    checked: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "text": self.text,
            "type": self.kind,
            "selector": self.selector,
            "className": self.class_name,
            "id": self.id,
        }
        if self.is_checkbox:
            result["isCheckbox"] = True
            result["checked"] = bool(self.checked)
        return result


def matches_search_term(facts: ElementFacts, term: str) -> bool:
    """Case-insensitive substring match against text, aria-label, class and id."""
    if not term:
        return True
    needle = term.lower()
    haystacks = (facts.text, facts.aria_label or "", facts.class_name, facts.id)
    return any(needle in h.lower() for h in haystacks)


def _css_string(value: str) -> str:
    """Quote *value* as a CSS string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


def derive_selector(facts: ElementFacts) -> str:
    """
    Build a selector that finds the element again.

    Priority: #id, then [aria-label="..."], then the first CSS class, then
    the tag name. Only the first available form is used. Ids and classes
    use the page's CSS.escape() form when it was collected.
    """
    if facts.id:
        return f"#{facts.selector_id or facts.id}"
    if facts.aria_label:
        return f"[aria-label={_css_string(facts.aria_label)}]"
    if facts.selector_class:
        return f".{facts.selector_class}"
    classes = facts.class_name.split()
    if classes:
        return f".{classes[0]}"
    return facts.tag


def derive_label(facts: ElementFacts) -> str:
    text = facts.text.strip()[:LABEL_MAX_CHARS]
    if text:
        return text
    if facts.is_checkbox and facts.id and facts.label_text:
        return facts.label_text.strip()[:LABEL_MAX_CHARS]
    return ""


def summarize_element(facts: ElementFacts) -> ElementSummary:
    checked = None
    if facts.is_checkbox:
        checked = bool(facts.checked) or facts.aria_checked == "true"
    return ElementSummary(
        selector=derive_selector(facts),
        kind=facts.type or facts.role or facts.tag,
        text=derive_label(facts),
        class_name=facts.class_name,
        id=facts.id,
        is_checkbox=facts.is_checkbox,
        checked=checked,
    )


def select_elements(candidates: list[ElementFacts], search_term: str, limit: int) -> list[ElementSummary]:
    """Filter candidates by *search_term*, cap to *limit*, and summarize each."""
    matched = [facts for facts in candidates if matches_search_term(facts, search_term)]
    return [summarize_element(facts) for facts in matched[:limit]]


async def collect_elements(page: Page, element_types: list[str], cap: int) -> list[ElementFacts]:
    """Read raw facts for the first *cap* elements matching any of *element_types*."""
    selector = ", ".join(element_types)
    raw = await page.evaluate(_COLLECT_ELEMENTS_JS, [selector, cap])
    return [ElementFacts.from_dict(item) for item in raw or []]


# ---------------------------------------------------------------------------
# Event/card extraction
# ---------------------------------------------------------------------------


def complete_cards(records: list[dict[str, Any]]) -> list[tuple[str, str]]:
    """Keep only records that carry both a title and a time, in page order."""
    cards = []
    for record in records:
        title = (record.get("title") or "").strip()
        time = (record.get("time") or "").strip()
        if title and time:
            cards.append((title, time))
    return cards


def format_cards(cards: list[tuple[str, str]]) -> str:
    return "\n\n".join(f"**{title}**\n**{time}**" for title, time in cards)


async def collect_cards(page: Page, container_selector: str, limit: int) -> list[dict[str, Any]]:
    """Read title/time candidates for the first *limit* containers."""
    raw = await page.evaluate(
        _COLLECT_CARDS_JS,
        [container_selector, limit, TITLE_SELECTOR, TIME_SELECTOR],
    )
    return list(raw or [])
