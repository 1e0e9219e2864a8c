"""Walk the paginated search results and collect every record.

States::

    AWAITING_FIRST_PAGE -> EXTRACTING_PAGE -> LOCATING_NEXT
        LOCATING_NEXT -> NAVIGATING -> EXTRACTING_PAGE
        LOCATING_NEXT -> DONE

A result wait that times out on a later page ends the crawl with what has been
collected so far. That is the same outcome as reaching the last page; a slow
page cannot be told apart from a missing one. ``stop_reason`` on the result
records which of the two signals ended the crawl.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from playwright.sync_api import Page, TimeoutError as PWTimeout

from . import config
from .errors import MaxPagesExceededError
from .extractor import extract_records
from .logging_utils import _crawl_event
from .models import ResultRecord
from .selectors_search import SEARCH_PAGE_SELECTORS, SearchPageSelectors

_IS_INACTIVE_JS = """
(el, classes) => {
    const item = el.parentElement;
    return !!item && classes.some((cls) => item.classList.contains(cls));
}
"""


class CrawlState(str, Enum):
    AWAITING_FIRST_PAGE = "awaiting_first_page"
    EXTRACTING_PAGE = "extracting_page"
    LOCATING_NEXT = "locating_next"
    NAVIGATING = "navigating"
    DONE = "done"


class StopReason:
    NO_RESULTS = "no_results"
    PAGE_WAIT_TIMEOUT = "page_wait_timeout"
    NO_NEXT_CONTROL = "no_next_control"


@dataclass
class CrawlResult:
    records: list[ResultRecord] = field(default_factory=list)
    pages: int = 0
    stop_reason: str = StopReason.NO_RESULTS

    @property
    def found(self) -> bool:
        return self.stop_reason != StopReason.NO_RESULTS

    @property
    def total(self) -> int:
        return len(self.records)


def locate_next_control(
    page: Page, selectors: SearchPageSelectors = SEARCH_PAGE_SELECTORS
) -> Optional[Any]:
    """Return the element that advances to the next page, or ``None``.

    The numbered item after the current one is preferred; otherwise the
    "ถัดไป" link is used unless its list item is hidden or disabled.
    """

    handle = page.query_selector(selectors.next_page_number)
    if handle is not None:
        return handle

    handle = page.query_selector(f"xpath={selectors.next_label_xpath}")
    if handle is None:
        return None
    if handle.evaluate(_IS_INACTIVE_JS, list(selectors.inactive_classes)):
        return None
    return handle


class PaginationCrawler:
    def __init__(
        self,
        page: Page,
        *,
        selectors: SearchPageSelectors = SEARCH_PAGE_SELECTORS,
        first_timeout_seconds: Optional[float] = None,
        page_timeout_seconds: Optional[float] = None,
        max_pages: Optional[int] = None,
        extract: Callable[..., list[ResultRecord]] = extract_records,
    ) -> None:
        self.page = page
        self.selectors = selectors
        self.first_timeout_seconds = (
            config.FIRST_RESULT_TIMEOUT_SECONDS
            if first_timeout_seconds is None
            else first_timeout_seconds
        )
        self.page_timeout_seconds = (
            config.PAGE_RESULT_TIMEOUT_SECONDS
            if page_timeout_seconds is None
            else page_timeout_seconds
        )
        self.max_pages = config.MAX_PAGES if max_pages is None else max_pages
        self.extract = extract
        self.state = CrawlState.AWAITING_FIRST_PAGE

    def _transition(self, state: CrawlState, **fields: Any) -> None:
        _crawl_event("state", phase="crawl", source=self.state, target=state, **fields)
        self.state = state

    def _wait_for_results(self, timeout_seconds: float) -> bool:
        try:
            self.page.wait_for_selector(
                self.selectors.result_entry,
                state="attached",
                timeout=timeout_seconds * 1000,
            )
            return True
        except PWTimeout:
            return False

    def run(self) -> CrawlResult:
        result = CrawlResult()
        next_control: Optional[Any] = None

        while self.state is not CrawlState.DONE:
            if self.state is CrawlState.AWAITING_FIRST_PAGE:
                if self._wait_for_results(self.first_timeout_seconds):
                    self._transition(CrawlState.EXTRACTING_PAGE)
                else:
                    result.stop_reason = StopReason.NO_RESULTS
                    self._transition(CrawlState.DONE, reason=result.stop_reason)

            elif self.state is CrawlState.EXTRACTING_PAGE:
                if not self._wait_for_results(self.page_timeout_seconds):
                    result.stop_reason = StopReason.PAGE_WAIT_TIMEOUT
                    self._transition(
                        CrawlState.DONE, reason=result.stop_reason, pages=result.pages
                    )
                    continue
                html = self.page.content()
                records = self.extract(
                    html, start_no=len(result.records) + 1, selectors=self.selectors
                )
                result.records.extend(records)
                result.pages += 1
                self._transition(
                    CrawlState.LOCATING_NEXT, page=result.pages, records=len(records)
                )

            elif self.state is CrawlState.LOCATING_NEXT:
                next_control = locate_next_control(self.page, self.selectors)
                if next_control is None:
                    result.stop_reason = StopReason.NO_NEXT_CONTROL
                    self._transition(
                        CrawlState.DONE, reason=result.stop_reason, pages=result.pages
                    )
                elif self.max_pages and result.pages >= self.max_pages:
                    _crawl_event(
                        "error", phase="crawl", error="max_pages_exceeded", max_pages=self.max_pages
                    )
                    raise MaxPagesExceededError(self.max_pages)
                else:
                    self._transition(CrawlState.NAVIGATING)

            elif self.state is CrawlState.NAVIGATING:
                # The transition can begin before the click call returns.
                with self.page.expect_navigation(wait_until="domcontentloaded"):
                    next_control.evaluate("(el) => el.click()")
                next_control = None
                self._transition(CrawlState.EXTRACTING_PAGE)

        return result


def crawl_results(page: Page, **kwargs: Any) -> CrawlResult:
    """Run a :class:`PaginationCrawler` over ``page`` and return its result."""

    return PaginationCrawler(page, **kwargs).run()


__all__ = [
    "CrawlState",
    "StopReason",
    "CrawlResult",
    "PaginationCrawler",
    "locate_next_control",
    "crawl_results",
]
