"""Selectors for the ratchakitcha.soc.go.th search page."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SearchPageSelectors:
    """Selector hints for the search form and its paginated results.

    The page carries two search tabs: tab 1 is the advanced search (keyword,
    book, session, document types, dates) and tab 2 the category search
    (category checkboxes, dates). Both submit to the same results listing.
    """

    search_root: str = "#search-result"

    # Advanced search (tab 1)
    keyword_input: str = "#search-keyword"
    book_input: str = 'input[name="book"]'
    session_input: str = 'input[name="session"]'
    extra_session_input: str = 'input[name="session-extra"]'
    type_checkboxes: str = 'input[name="type[]"]'
    advanced_date_from: str = "#search1-date-from"
    advanced_date_to: str = "#search1-date-to"
    advanced_submit: str = "#btn-search1"

    # Category search (tab 2)
    category_tab: str = "#search2-tab"
    category_panel: str = "#search2"
    category_checkboxes: str = 'input[name="sub-category[]"]'
    category_date_from: str = "#search2-date-from"
    category_date_to: str = "#search2-date-to"
    category_submit: str = "#btn-search2"

    # Results
    result_entry: str = ".post-thumbnail-entry"
    entry_title_link: str = "a.m-b-10"
    entry_date: str = "span.post-date"
    entry_citation: str = "span.post-category"

    # Pagination
    next_page_number: str = (
        "ul.pagination li.page-item.current + li.page-item:not(.hidden):not(.disabled) a.page-numbers"
    )
    next_label: str = "ถัดไป"
    inactive_classes: Tuple[str, ...] = ("hidden", "disabled")

    @property
    def next_label_xpath(self) -> str:
        return (
            '//ul[contains(@class,"pagination")]'
            f'//a[normalize-space(text())="{self.next_label}"]'
        )


SEARCH_PAGE_SELECTORS = SearchPageSelectors()

__all__ = ["SearchPageSelectors", "SEARCH_PAGE_SELECTORS"]
