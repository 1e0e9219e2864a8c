"""Turn one rendered results page into :class:`ResultRecord` objects."""
from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .citation import parse_citation
from .locale_utils import parse_thai_date
from .logging_utils import _crawl_event
from .models import ResultRecord
from .selectors_search import SEARCH_PAGE_SELECTORS, SearchPageSelectors
from .utils import normalize_space


def _text_or_none(element: Optional[Tag]) -> Optional[str]:
    if element is None:
        return None
    return normalize_space(element.get_text()) or None


def _extract_entry(
    entry: Tag, no: int, selectors: SearchPageSelectors
) -> tuple[ResultRecord, bool]:
    link = entry.select_one(selectors.entry_title_link)
    title = _text_or_none(link)
    file_path = None
    if link is not None and link.has_attr("href"):
        file_path = str(link.get("href")).strip() or None

    raw_date = _text_or_none(entry.select_one(selectors.entry_date))
    publish_date = parse_thai_date(raw_date) if raw_date else None

    # The citation is sometimes split over several spans.
    citation_text = " ".join(
        text
        for text in (_text_or_none(el) for el in entry.select(selectors.entry_citation))
        if text
    )
    citation = parse_citation(citation_text)

    record = ResultRecord(
        no=no,
        title=title,
        book_no=citation.book_no,
        section=citation.section,
        category=citation.category,
        publish_date=publish_date,
        page_no=citation.page_no,
        file_path=file_path,
    )
    return record, citation.matched


def extract_records(
    html: str,
    *,
    start_no: int = 1,
    selectors: SearchPageSelectors = SEARCH_PAGE_SELECTORS,
) -> list[ResultRecord]:
    """Return the result entries of ``html`` in document order.

    Records are numbered consecutively from ``start_no`` so that numbering can
    continue across pages.
    """

    soup = BeautifulSoup(html, "html5lib")
    records: list[ResultRecord] = []
    unparsed = 0
    for offset, entry in enumerate(soup.select(selectors.result_entry)):
        record, cited = _extract_entry(entry, start_no + offset, selectors)
        if not cited:
            unparsed += 1
        records.append(record)

    _crawl_event(
        "extract",
        entries=len(records),
        first_no=start_no if records else None,
        unparsed_citations=unparsed,
    )
    return records


__all__ = ["extract_records"]
