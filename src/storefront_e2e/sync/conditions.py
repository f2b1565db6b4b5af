"""Named wait conditions evaluated against a Playwright page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..models import Locator

READY_STATE_SCRIPT = "() => document.readyState"

# True when the element's centre is not covered by another element. Points
# outside the viewport cannot be hit-tested and count as unobscured.
HIT_TEST_SCRIPT = """el => {
    const rect = el.getBoundingClientRect();
    const x = rect.left + rect.width / 2;
    const y = rect.top + rect.height / 2;
    if (x < 0 || y < 0 || x > window.innerWidth || y > window.innerHeight) {
        return true;
    }
    const top = document.elementFromPoint(x, y);
    return top !== null && (top === el || el.contains(top));
}"""

OPTION_VALUES_SCRIPT = "el => Array.from(el.options || []).map(option => option.value)"

SCROLL_TO_TOP_SCRIPT = "() => window.scrollTo(0, 0)"

SCROLL_TO_BOTTOM_SCRIPT = "() => window.scrollTo(0, document.body.scrollHeight)"


@dataclass(frozen=True)
class WaitCondition:
    """A named predicate over a page and, usually, a locator."""

    name: str
    check: Callable[[Any], Any]
    locator: Optional[Locator] = None

    def describe(self) -> str:
        if self.locator is None:
            return self.name
        return f"{self.name} on {self.locator.describe()}"


def visible(locator: Locator) -> WaitCondition:
    """The element exists and has a non-empty render box."""

    def check(page: Any) -> Any:
        element = locator.resolve(page)
        if element.count() and element.is_visible():
            return element
        return None

    return WaitCondition("element-visible", check, locator)


def clickable(locator: Locator) -> WaitCondition:
    """The element is visible, enabled and not covered by another element."""

    def check(page: Any) -> Any:
        element = locator.resolve(page)
        if not element.count() or not element.is_visible():
            return None
        if not element.is_enabled():
            return None
        if not element.evaluate(HIT_TEST_SCRIPT):
            return None
        return element

    return WaitCondition("element-clickable", check, locator)


def absent(locator: Locator) -> WaitCondition:
    """The element does not exist or is not visible."""

    def check(page: Any) -> bool:
        element = locator.resolve(page)
        return not element.count() or not element.is_visible()

    return WaitCondition("element-absent", check, locator)


def page_ready() -> WaitCondition:
    """The document has finished loading."""

    def check(page: Any) -> bool:
        return page.evaluate(READY_STATE_SCRIPT) == "complete"

    return WaitCondition("page-ready", check)


def text_contains(locator: Locator, text: str) -> WaitCondition:
    """The element is visible and its rendered text contains ``text``."""

    def check(page: Any) -> Any:
        element = locator.resolve(page)
        if element.count() and element.is_visible() and text in element.inner_text():
            return element
        return None

    return WaitCondition(f"text-contains '{text}'", check, locator)


def url_contains(fragment: str) -> WaitCondition:
    """The page URL contains ``fragment``."""

    def check(page: Any) -> bool:
        return fragment in page.url

    return WaitCondition(f"url-contains '{fragment}'", check)


def text_equals(locator: Locator, text: str) -> WaitCondition:
    """The element is visible and its stripped rendered text is exactly ``text``."""

    def check(page: Any) -> Any:
        element = locator.resolve(page)
        if element.count() and element.is_visible() and element.inner_text().strip() == text:
            return element
        return None

    return WaitCondition(f"text-equals '{text}'", check, locator)
