"""Browser primitives shared by every page object.

``PageActions`` wraps one Playwright ``Page`` and is injected into each
feature page object. It provides:

- Navigation relative to the application's base URL
- Explicit-fallback selector resolution (first present candidate wins)
- Condition-based waits (``wait_until`` raises, ``settle`` does not)
- Queries that report absence instead of raising
- Dialog handling scoped to a single block

Usage:
    actions = PageActions(page, base_url="http://localhost:3000")
    actions.navigate("/all-jobs")
    actions.wait_for_url("/all-jobs")
    if actions.is_visible(Selector.of(".job-card")):
        ...
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar
from urllib.parse import urlsplit

import structlog
from playwright.sync_api import Dialog, Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from tenacity import RetryError, Retrying, retry_if_result, stop_after_delay, wait_fixed

from jobtrack_e2e.constants.timeouts import (
    ELEMENT_TIMEOUT_MS,
    POLL_INTERVAL_MS,
    READ_TIMEOUT_MS,
    RERENDER_TIMEOUT_MS,
    SETTLE_TIMEOUT_MS,
    STABLE_POLLS,
    URL_TIMEOUT_MS,
)
from jobtrack_e2e.core.exceptions import WaitTimeoutError
from jobtrack_e2e.pages.locators import Selector

log = structlog.get_logger(__name__)

T = TypeVar("T")

UrlTarget = str | Sequence[str] | re.Pattern[str]

# Match count and first match text of a list, taken before an action
ListingSnapshot = tuple[int, str | None]


def _not_done(result: object) -> bool:
    return result is None or result is False


class PageActions:
    """Selector-driven primitives over a Playwright page.

    Attributes:
        page: The underlying Playwright page.
        base_url: Application origin, without trailing slash.
        action_timeout: Budget (ms) for an action's target to appear.
        settle_timeout: Budget (ms) for re-render settling after async UI updates.
        rerender_timeout: Budget (ms) for a list to start re-rendering after a
            filter or search change; no change within it is accepted.
        poll_interval: Interval (ms) between polls of waits.
    """

    def __init__(
        self,
        page: Page,
        base_url: str,
        action_timeout: float = ELEMENT_TIMEOUT_MS,
        settle_timeout: float = SETTLE_TIMEOUT_MS,
        poll_interval: float = POLL_INTERVAL_MS,
        rerender_timeout: float = RERENDER_TIMEOUT_MS,
    ) -> None:
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.action_timeout = action_timeout
        self.settle_timeout = settle_timeout
        self.poll_interval = poll_interval
        self.rerender_timeout = rerender_timeout

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def absolute_url(self, url_or_path: str) -> str:
        if url_or_path.startswith(("http://", "https://")):
            return url_or_path
        return f"{self.base_url}/{url_or_path.lstrip('/')}"

    def navigate(self, url_or_path: str) -> None:
        """Load a page; engine errors (DNS, timeout) propagate."""
        url = self.absolute_url(url_or_path)
        log.debug("navigate", url=url)
        self.page.goto(url)

    @property
    def url(self) -> str:
        return self.page.url

    @property
    def path(self) -> str:
        """Path of the current location, ``/`` for the bare origin."""
        return urlsplit(self.page.url).path or "/"

    def is_on(self, path: str) -> bool:
        return self.path == path

    def path_contains(self, fragment: str) -> bool:
        return fragment in self.path

    def url_pattern(self, paths: str | Sequence[str]) -> re.Pattern[str]:
        """Regex matching any of ``paths`` on this origin, query/fragment allowed."""
        if isinstance(paths, str):
            paths = [paths]
        alternatives = "|".join(re.escape(path) for path in paths)
        return re.compile(rf"^{re.escape(self.base_url)}(?:{alternatives})(?:[?#].*)?$")

    def wait_for_url(self, target: UrlTarget, timeout: float = URL_TIMEOUT_MS) -> None:
        """Block until the location matches one of the given paths (or a regex)."""
        pattern = target if isinstance(target, re.Pattern) else self.url_pattern(target)
        log.debug("wait_for_url", pattern=pattern.pattern, timeout_ms=timeout)
        self.page.wait_for_url(pattern, timeout=timeout)

    # -------------------------------------------------------------------------
    # Waiting
    # -------------------------------------------------------------------------

    def _sleep(self, seconds: float) -> None:
        # Keeps the engine's event loop running between polls
        self.page.wait_for_timeout(seconds * 1000)

    def _poll(self, predicate: Callable[[], T | None], timeout: float) -> T | None:
        retrying = Retrying(
            stop=stop_after_delay(timeout / 1000),
            wait=wait_fixed(self.poll_interval / 1000),
            retry=retry_if_result(_not_done),
            sleep=self._sleep,
        )
        try:
            result = retrying(predicate)
        except RetryError:
            return None
        return None if _not_done(result) else result

    def wait_until(
        self,
        predicate: Callable[[], T | None],
        timeout: float = ELEMENT_TIMEOUT_MS,
        description: str = "condition",
    ) -> T:
        """Poll ``predicate`` until it returns something other than None/False.

        Raises:
            WaitTimeoutError: If the condition does not hold within ``timeout`` ms.
        """
        result = self._poll(predicate, timeout)
        if result is None:
            raise WaitTimeoutError(description, timeout)
        return result

    def settle(self, predicate: Callable[[], object], timeout: float | None = None) -> bool:
        """Give the UI up to ``timeout`` ms to reach a state; never raises.

        Used after actions whose effect is an asynchronous re-render with no
        event to await. The caller's own assertion decides pass/fail.
        """
        timeout = self.settle_timeout if timeout is None else timeout
        settled = self._poll(lambda: True if predicate() else None, timeout) is not None
        if not settled:
            log.warning("settle_timed_out", timeout_ms=timeout, url=self.url)
        return settled

    def wait_for_element(
        self,
        selector: Selector,
        timeout: float = ELEMENT_TIMEOUT_MS,
        scope: Locator | None = None,
    ) -> Locator:
        """Wait for the first candidate with a visible match.

        Raises:
            WaitTimeoutError: Naming the selector and the timeout.
        """
        return self.wait_until(
            lambda: self._visible_candidate(selector, scope),
            timeout=timeout,
            description=str(selector),
        )

    def wait_for_hidden(
        self,
        selector: Selector,
        timeout: float = ELEMENT_TIMEOUT_MS,
        scope: Locator | None = None,
    ) -> None:
        self.wait_until(
            lambda: not self.is_visible(selector, scope=scope),
            timeout=timeout,
            description=f"{selector} to be hidden",
        )

    def wait_for_stable_count(
        self,
        selector: Selector,
        timeout: float | None = None,
        stable_polls: int = STABLE_POLLS,
    ) -> bool:
        """Settle until the match count stops changing between polls."""
        history: list[int] = []

        def count_is_stable() -> bool:
            history.append(self.get_element_count(selector))
            recent = history[-stable_polls:]
            return len(recent) == stable_polls and len(set(recent)) == 1

        return self.settle(count_is_stable, timeout)

    def snapshot(self, selector: Selector) -> ListingSnapshot:
        return self.get_element_count(selector), self.get_text_content(selector)

    def wait_for_rerender(
        self,
        selector: Selector,
        before: ListingSnapshot,
        timeout: float | None = None,
    ) -> bool:
        """Settle a list after an action that may re-render it.

        Waits up to ``timeout`` ms (default ``rerender_timeout``) for the
        match count or the first match's text to differ from ``before``,
        then until the count stops changing. A list that never changes is
        accepted once the budget runs out: the filter may simply match the
        same rows.

        Returns:
            True if the list changed.
        """
        timeout = self.rerender_timeout if timeout is None else timeout
        changed = self._poll(lambda: self.snapshot(selector) != before or None, timeout) is not None
        if not changed:
            log.debug("listing_unchanged", selector=selector.primary, timeout_ms=timeout)
        self.wait_for_stable_count(selector)
        return changed

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _root(self, scope: Locator | None) -> Page | Locator:
        return self.page if scope is None else scope

    def _note_fallback(self, selector: Selector, candidate: str) -> None:
        if candidate != selector.primary:
            log.warning(
                "selector_fallback_used",
                primary=selector.primary,
                fallback=candidate,
            )

    def _present_candidate(self, selector: Selector, scope: Locator | None) -> Locator | None:
        root = self._root(scope)
        for candidate in selector:
            locator = root.locator(candidate)
            if locator.count() > 0:
                self._note_fallback(selector, candidate)
                return locator
        return None

    def _visible_candidate(self, selector: Selector, scope: Locator | None) -> Locator | None:
        root = self._root(scope)
        for candidate in selector:
            locator = root.locator(candidate)
            visible = self._first_visible(locator)
            if visible is not None:
                self._note_fallback(selector, candidate)
                return visible
        return None

    @staticmethod
    def _first_visible(locator: Locator) -> Locator | None:
        """First visible match, however many hidden matches precede it."""
        visible = locator.filter(visible=True)
        return visible.first if visible.count() > 0 else None

    def locate(self, selector: Selector, scope: Locator | None = None) -> Locator:
        """Locator for the first present candidate, else for the primary.

        Non-blocking: with nothing present yet the primary candidate is
        returned so that engine auto-waiting reports the canonical selector.
        """
        found = self._present_candidate(selector, scope)
        return found if found is not None else self._root(scope).locator(selector.primary)

    def resolve(self, selector: Selector, scope: Locator | None = None) -> Locator:
        """First visible match (else first match) of the first present candidate.

        Waits up to the action timeout for any candidate to appear.

        Raises:
            WaitTimeoutError: If no candidate matches within the action timeout.
        """
        located = self.wait_until(
            lambda: self._present_candidate(selector, scope),
            timeout=self.action_timeout,
            description=str(selector),
        )
        visible = self._first_visible(located)
        return located.first if visible is None else visible

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    def fill_input(self, selector: Selector, value: str, scope: Locator | None = None) -> None:
        log.debug("fill_input", selector=selector.primary)
        self.resolve(selector, scope).fill(value)

    def clear_input(self, selector: Selector, scope: Locator | None = None) -> None:
        self.resolve(selector, scope).fill("")

    def click_element(self, selector: Selector, scope: Locator | None = None) -> None:
        log.debug("click_element", selector=selector.primary)
        self.resolve(selector, scope).click()

    def select_option(self, selector: Selector, value: str, scope: Locator | None = None) -> None:
        log.debug("select_option", selector=selector.primary, value=value)
        self.resolve(selector, scope).select_option(value)

    # -------------------------------------------------------------------------
    # Queries (absence is a value, never an exception)
    # -------------------------------------------------------------------------

    def is_visible(self, selector: Selector, scope: Locator | None = None) -> bool:
        return self._visible_candidate(selector, scope) is not None

    def get_element_count(self, selector: Selector, scope: Locator | None = None) -> int:
        found = self._present_candidate(selector, scope)
        return 0 if found is None else found.count()

    def _read_first(
        self, selector: Selector, scope: Locator | None, read: Callable[[Locator], T]
    ) -> T | None:
        """Apply ``read`` to the first match; None when nothing matches.

        The match can detach between ``count()`` and the read, so reads get
        a short budget and a detached match counts as absent.
        """
        found = self._present_candidate(selector, scope)
        if found is None:
            return None
        try:
            return read(found.first)
        except PlaywrightTimeoutError:
            log.debug("match_detached", selector=selector.primary)
            return None

    def get_text_content(self, selector: Selector, scope: Locator | None = None) -> str | None:
        """Text of the first match; ``None`` when nothing matches, ``""`` when empty."""
        return self._read_first(
            selector, scope, lambda match: match.text_content(timeout=READ_TIMEOUT_MS) or ""
        )

    def get_input_value(self, selector: Selector, scope: Locator | None = None) -> str | None:
        return self._read_first(
            selector, scope, lambda match: match.input_value(timeout=READ_TIMEOUT_MS)
        )

    def get_attribute(
        self, selector: Selector, name: str, scope: Locator | None = None
    ) -> str | None:
        return self._read_first(
            selector, scope, lambda match: match.get_attribute(name, timeout=READ_TIMEOUT_MS)
        )

    def has_class(self, selector: Selector, class_name: str, scope: Locator | None = None) -> bool:
        classes = self.get_attribute(selector, "class", scope) or ""
        return class_name in classes.split()

    def evaluate(self, selector: Selector, expression: str, scope: Locator | None = None) -> Any:
        return self._read_first(
            selector, scope, lambda match: match.evaluate(expression, timeout=READ_TIMEOUT_MS)
        )

    def matching(
        self, selector: Selector, has_text: str, scope: Locator | None = None
    ) -> Locator:
        """Matches of ``selector`` whose text contains ``has_text``."""
        return self.locate(selector, scope).filter(has_text=has_text)

    def any_visible(self, locator: Locator) -> bool:
        return self._first_visible(locator) is not None

    # -------------------------------------------------------------------------
    # Dialogs
    # -------------------------------------------------------------------------

    @contextmanager
    def accepting_dialogs(self, accept: bool = True) -> Iterator[list[str]]:
        """Accept (or dismiss) native dialogs raised inside the block only.

        Yields the list of dialog messages seen, so callers can assert on
        the confirmation text.

        Usage:
            with actions.accepting_dialogs():
                actions.click_element(delete_button)
        """
        messages: list[str] = []

        def handle(dialog: Dialog) -> None:
            messages.append(dialog.message)
            log.debug("dialog", kind=dialog.type, accept=accept)
            if accept:
                dialog.accept()
            else:
                dialog.dismiss()

        self.page.on("dialog", handle)
        try:
            yield messages
        finally:
            self.page.remove_listener("dialog", handle)

    # -------------------------------------------------------------------------
    # Session control
    # -------------------------------------------------------------------------

    def clear_cookies(self) -> None:
        self.page.context.clear_cookies()

    def reload(self) -> None:
        self.page.reload()

    def go_back(self) -> None:
        self.page.go_back()

    def go_forward(self) -> None:
        self.page.go_forward()

    def set_viewport_size(self, width: int, height: int) -> None:
        self.page.set_viewport_size({"width": width, "height": height})
