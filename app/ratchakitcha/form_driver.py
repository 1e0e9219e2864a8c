"""Fill and submit the gazette search form.

The page validates its inputs with listeners bound to ``input`` and
``change`` events; assigning ``value`` without dispatching both events leaves
the form believing the field is still empty. Every field written here goes
through :func:`set_field` for that reason.
"""
from __future__ import annotations

from typing import Iterable, Literal, Optional

from playwright.sync_api import Page

from . import config
from .logging_utils import _crawl_event
from .models import AdvancedSearch, CategorySearch, SearchRequest
from .selectors_search import SEARCH_PAGE_SELECTORS, SearchPageSelectors
from .utils import log_line

_SET_FIELD_JS = """
([selector, value]) => {
    const el = document.querySelector(selector);
    if (!el) {
        return false;
    }
    el.focus();
    el.value = '';
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
    el.blur();
    return true;
}
"""

_RECONCILE_CHECKBOXES_JS = """
([selector, wanted, matchBy]) => {
    const toggled = [];
    document.querySelectorAll(selector).forEach((cb) => {
        let key;
        if (matchBy === 'value') {
            key = cb.value;
        } else {
            const labelEl = (cb.labels && cb.labels[0]) || cb.nextElementSibling;
            key = ((labelEl && labelEl.textContent) || '').trim();
        }
        const want = wanted.some((w) => matchBy === 'value' ? key === w : key.includes(w));
        if (want !== cb.checked) {
            cb.click();
            toggled.push({ key: key, checked: want });
        }
    });
    return toggled;
}
"""

CheckboxMatch = Literal["label", "value"]


def wait_seconds(page: Optional[Page], seconds: float) -> None:
    """Wait for ``seconds`` only if *page* remains open."""

    if page is None:
        return

    if seconds is None or seconds <= 0:
        return

    if not page.is_closed():
        page.wait_for_timeout(int(seconds * 1000))


def set_field(page: Page, selector: str, value: Optional[str]) -> bool:
    """Replace the value of the control at ``selector`` and fire input/change.

    Returns ``False`` when ``value`` is empty or the control is not on the page.
    """

    if not value:
        return False
    found = bool(page.evaluate(_SET_FIELD_JS, [selector, value]))
    if not found:
        log_line(f"[FORM] Control {selector} not found; skipping value")
    _crawl_event("form", step="set_field", selector=selector, found=found)
    return found


def reconcile_checkboxes(
    page: Page,
    selector: str,
    wanted: Iterable[str],
    *,
    match_by: CheckboxMatch = "label",
) -> list[dict]:
    """Make exactly the checkboxes matching ``wanted`` checked.

    The form keeps checkbox state between renders, so boxes that do not match
    are unchecked as well. Matching is by label substring or exact value.
    Returns the boxes that were toggled.
    """

    toggled = page.evaluate(_RECONCILE_CHECKBOXES_JS, [selector, list(wanted), match_by]) or []
    _crawl_event(
        "form",
        step="reconcile_checkboxes",
        selector=selector,
        match_by=match_by,
        toggled=len(toggled),
    )
    return list(toggled)


def open_search_page(
    page: Page,
    *,
    url: Optional[str] = None,
    selectors: SearchPageSelectors = SEARCH_PAGE_SELECTORS,
) -> None:
    target = url or config.SEARCH_URL
    _crawl_event("nav", step="goto", url=target)
    page.goto(target, wait_until="domcontentloaded")
    page.wait_for_selector(
        selectors.search_root,
        state="visible",
        timeout=config.SEARCH_FORM_TIMEOUT_SECONDS * 1000,
    )


def _submit(page: Page, selector: str) -> None:
    # The navigation can start before the click returns, so arm the wait first.
    with page.expect_navigation(wait_until="domcontentloaded"):
        page.evaluate("(sel) => document.querySelector(sel).click()", selector)


def _fill_category_search(
    page: Page, request: CategorySearch, selectors: SearchPageSelectors
) -> None:
    page.click(selectors.category_tab)
    page.wait_for_selector(selectors.category_panel, state="visible")
    reconcile_checkboxes(page, selectors.category_checkboxes, [request.category_name])
    set_field(page, selectors.category_date_from, request.date_from)
    set_field(page, selectors.category_date_to, request.date_to)


def _fill_advanced_search(
    page: Page, request: AdvancedSearch, selectors: SearchPageSelectors
) -> None:
    set_field(page, selectors.keyword_input, request.title)
    set_field(page, selectors.book_input, request.book_no)
    set_field(page, selectors.session_input, request.session_no)
    set_field(page, selectors.extra_session_input, request.extra_session_no)
    # Types not requested are unchecked as well, even when none are requested.
    reconcile_checkboxes(
        page, selectors.type_checkboxes, request.document_types, match_by="value"
    )
    set_field(page, selectors.advanced_date_from, request.date_from)
    set_field(page, selectors.advanced_date_to, request.date_to)
    # Clicking outside closes any date picker the inputs opened.
    page.click("body")


def fill_and_submit(
    page: Page,
    request: SearchRequest,
    *,
    selectors: SearchPageSelectors = SEARCH_PAGE_SELECTORS,
    settle_seconds: Optional[float] = None,
) -> None:
    """Fill the form for ``request`` and submit it, waiting for the navigation."""

    if isinstance(request, CategorySearch):
        _fill_category_search(page, request, selectors)
        submit_selector = selectors.category_submit
    else:
        _fill_advanced_search(page, request, selectors)
        submit_selector = selectors.advanced_submit

    wait_seconds(page, config.FORM_SETTLE_SECONDS if settle_seconds is None else settle_seconds)
    _crawl_event("form", step="submit", selector=submit_selector, layout=request.layout)
    _submit(page, submit_selector)


__all__ = [
    "wait_seconds",
    "set_field",
    "reconcile_checkboxes",
    "open_search_page",
    "fill_and_submit",
]
