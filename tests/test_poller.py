import pytest
from playwright.sync_api import Error as PlaywrightError

from fakes import FakeClock, FakeElement, FakePage
from storefront_e2e.errors import ConditionTimeoutError, ElementNotFoundError
from storefront_e2e.models import Locator
from storefront_e2e.sync.conditions import (
    WaitCondition,
    absent,
    page_ready,
    text_contains,
    url_contains,
    visible,
)
from storefront_e2e.sync.poller import ConditionPoller, Deadline, Satisfied, TimedOut


def _counting(results, calls):
    def check(page):
        calls.append(page)
        result = results[min(len(calls), len(results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result

    return check


def test_deadline_tracks_remaining_and_elapsed_time() -> None:
    clock = FakeClock()
    deadline = Deadline.after(2.0, clock=clock.time)
    clock.sleep(0.5)

    assert deadline.elapsed() == 0.5
    assert deadline.remaining() == 1.5
    assert not deadline.expired()

    clock.sleep(2.0)
    assert deadline.remaining() == 0.0
    assert deadline.expired()


def test_poll_returns_immediately_when_condition_holds() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.25, clock=clock.time, sleep=clock.sleep)
    calls: list = []
    condition = WaitCondition("ready", _counting(["value"], calls))

    outcome = poller.poll(condition, "page", poller.deadline(5))

    assert isinstance(outcome, Satisfied)
    assert outcome.value == "value"
    assert outcome.elapsed == 0.0
    assert calls == ["page"]
    assert clock.sleeps == []


def test_poll_sleeps_between_attempts_until_satisfied() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.25, clock=clock.time, sleep=clock.sleep)
    calls: list = []
    condition = WaitCondition("ready", _counting([None, False, 0, "done"], calls))

    outcome = poller.poll(condition, "page", poller.deadline(5))

    assert outcome
    assert outcome.ok is True
    assert outcome.value == "done"
    assert outcome.elapsed == 0.75
    assert clock.sleeps == [0.25, 0.25, 0.25]


def test_poll_times_out_after_a_final_evaluation_at_the_deadline() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.25, clock=clock.time, sleep=clock.sleep)
    calls: list = []
    locator = Locator.by_id("login-button", "login button")
    condition = WaitCondition("element-clickable", _counting([None], calls), locator)

    outcome = poller.poll(condition, "page", poller.deadline(1.0))

    assert isinstance(outcome, TimedOut)
    assert not outcome
    assert outcome.condition == "element-clickable"
    assert outcome.locator == locator
    assert outcome.elapsed == 1.0
    assert len(calls) == 5
    assert outcome.cause is None


def test_poll_never_sleeps_past_the_deadline() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.25, clock=clock.time, sleep=clock.sleep)
    condition = WaitCondition("never", lambda page: None)

    poller.poll(condition, None, poller.deadline(0.6))

    assert clock.sleeps[:2] == [0.25, 0.25]
    assert clock.sleeps[2] == pytest.approx(0.1)
    assert sum(clock.sleeps) == pytest.approx(0.6)


def test_zero_timeout_evaluates_exactly_once() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.25, clock=clock.time, sleep=clock.sleep)
    calls: list = []

    outcome = poller.poll(WaitCondition("never", _counting([None], calls)), None, poller.deadline(0))

    assert isinstance(outcome, TimedOut)
    assert len(calls) == 1
    assert clock.sleeps == []


def test_ignored_exceptions_count_as_not_yet_and_become_the_cause() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.5, clock=clock.time, sleep=clock.sleep)
    detached = PlaywrightError("Element is not attached to the DOM")
    calls: list = []

    outcome = poller.poll(WaitCondition("flaky", _counting([detached], calls)), None, poller.deadline(1))

    assert isinstance(outcome, TimedOut)
    assert outcome.cause is detached
    assert len(calls) == 3


def test_transient_errors_do_not_prevent_success() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.5, clock=clock.time, sleep=clock.sleep)
    calls: list = []
    results = [PlaywrightError("stale"), "element"]

    outcome = poller.poll(WaitCondition("flaky", _counting(results, calls)), None, poller.deadline(5))

    assert isinstance(outcome, Satisfied)
    assert outcome.value == "element"


def test_unexpected_exceptions_propagate() -> None:
    clock = FakeClock()
    poller = ConditionPoller(0.25, clock=clock.time, sleep=clock.sleep)

    def broken(page):
        raise ValueError("bug in condition")

    with pytest.raises(ValueError):
        poller.poll(WaitCondition("broken", broken), None, poller.deadline(5))


def test_poll_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ConditionPoller(0)


def test_timed_out_converts_to_typed_error() -> None:
    locator = Locator.by_id("user-name", "username field")
    outcome = TimedOut("element-visible", locator, 10.0, PlaywrightError("gone"))

    error = outcome.to_error(ElementNotFoundError)

    assert isinstance(error, ElementNotFoundError)
    assert isinstance(error, ConditionTimeoutError)
    assert error.condition == "element-visible"
    assert error.locator is locator
    assert "element-visible" in str(error)
    assert "username field (id=user-name)" in str(error)
    assert "10.00s" in str(error)
    assert "gone" in str(error)


def test_visible_condition_returns_the_element_only_when_rendered() -> None:
    page = FakePage()
    locator = Locator.by_class("title")
    condition = visible(locator)

    assert not condition.check(page)
    (element,) = page.add(locator.selector, FakeElement("Products", visible=False))
    assert not condition.check(page)
    element.visible = True
    assert condition.check(page).inner_text() == "Products"
    assert condition.describe() == "element-visible on class=title"


def test_absent_condition_holds_for_missing_or_hidden_elements() -> None:
    page = FakePage()
    locator = Locator.by_class("cart_item")
    condition = absent(locator)

    assert condition.check(page)
    (element,) = page.add(locator.selector, FakeElement())
    assert not condition.check(page)
    element.visible = False
    assert condition.check(page)


def test_page_conditions_read_the_document() -> None:
    page = FakePage("https://shop.test/inventory.html")
    page.ready_state = "interactive"

    assert not page_ready().check(page)
    page.ready_state = "complete"
    assert page_ready().check(page)
    assert url_contains("inventory").check(page)
    assert not url_contains("cart").check(page)


def test_text_contains_requires_matching_text() -> None:
    page = FakePage()
    locator = Locator.by_class("title")
    page.add(locator.selector, FakeElement("Your Cart"))

    assert text_contains(locator, "Cart").check(page)
    assert not text_contains(locator, "Products").check(page)
