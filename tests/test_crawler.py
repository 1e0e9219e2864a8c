from __future__ import annotations

import pytest

from app.ratchakitcha import config, crawler
from app.ratchakitcha.crawler import (
    CrawlState,
    PaginationCrawler,
    StopReason,
    crawl_results,
    locate_next_control,
)
from app.ratchakitcha.errors import MaxPagesExceededError

from tests.browser_fakes import FakePage, FakeResultPage, entry_html, results_html


def _page_with(*titles: str, **kwargs) -> FakeResultPage:
    return FakeResultPage(
        html=results_html(*(entry_html(title=t) for t in titles)), **kwargs
    )


def test_no_results_on_first_page() -> None:
    page = FakePage([FakeResultPage(has_entries=False)])

    result = crawl_results(page, first_timeout_seconds=5, page_timeout_seconds=10)

    assert result.found is False
    assert result.records == []
    assert result.stop_reason == StopReason.NO_RESULTS
    assert page.waits == [5000]


def test_single_page_without_pagination() -> None:
    page = FakePage([_page_with("ก", "ข")])

    result = crawl_results(page)

    assert result.found is True
    assert result.pages == 1
    assert [r.no for r in result.records] == [1, 2]
    assert result.stop_reason == StopReason.NO_NEXT_CONTROL
    assert page.navigations == 0


def test_follows_numbered_items_then_next_label() -> None:
    page = FakePage(
        [
            _page_with("หนึ่ง", "สอง", next_number=1),
            _page_with("สาม", next_label=2),
            _page_with("สี่", "ห้า", next_label=3, next_label_inactive=True),
            _page_with("never"),
        ]
    )

    result = crawl_results(page)

    assert [r.title for r in result.records] == ["หนึ่ง", "สอง", "สาม", "สี่", "ห้า"]
    assert [r.no for r in result.records] == [1, 2, 3, 4, 5]
    assert result.pages == 3
    assert page.clicks == [1, 2]
    assert result.stop_reason == StopReason.NO_NEXT_CONTROL


def test_timeout_on_later_page_keeps_collected_records() -> None:
    page = FakePage(
        [
            _page_with("หนึ่ง", next_number=1),
            FakeResultPage(has_entries=False),
        ]
    )

    result = crawl_results(page, first_timeout_seconds=5, page_timeout_seconds=10)

    assert result.found is True
    assert [r.title for r in result.records] == ["หนึ่ง"]
    assert result.stop_reason == StopReason.PAGE_WAIT_TIMEOUT
    assert page.waits == [5000, 10000, 10000]


def test_numbered_item_preferred_over_next_label() -> None:
    page = FakePage([FakeResultPage(next_number=4, next_label=9)])

    control = locate_next_control(page)

    assert control is not None
    assert control.target == 4


def test_inactive_next_label_is_rejected() -> None:
    page = FakePage([FakeResultPage(next_label=1, next_label_inactive=True)])
    assert locate_next_control(page) is None


def test_terminates_within_bounded_advances() -> None:
    pages = [_page_with(f"p{i}", next_number=i + 1) for i in range(20)]
    pages.append(_page_with("last"))
    page = FakePage(pages)

    result = crawl_results(page, max_pages=0)

    assert result.pages == 21
    assert page.navigations == 20
    assert [r.no for r in result.records] == list(range(1, 22))


def test_cyclic_next_control_hits_max_pages() -> None:
    page = FakePage([_page_with("a", next_number=1), _page_with("b", next_number=0)])

    with pytest.raises(MaxPagesExceededError) as excinfo:
        crawl_results(page, max_pages=5)

    assert excinfo.value.http_status == 500
    assert page.navigations == 4


def test_state_ends_done_and_transitions_are_logged(monkeypatch) -> None:
    events: list[dict] = []
    monkeypatch.setattr(
        crawler, "_crawl_event", lambda label, **fields: events.append(fields)
    )
    page = FakePage([_page_with("x", next_number=1), _page_with("y")])

    instance = PaginationCrawler(page)
    instance.run()

    assert instance.state is CrawlState.DONE
    targets = [e["target"] for e in events if e.get("phase") == "crawl" and "target" in e]
    assert targets == [
        "extracting_page",
        "locating_next",
        "navigating",
        "extracting_page",
        "locating_next",
        "done",
    ]


def test_defaults_come_from_config(monkeypatch) -> None:
    monkeypatch.setattr(config, "FIRST_RESULT_TIMEOUT_SECONDS", 1.5)
    monkeypatch.setattr(config, "PAGE_RESULT_TIMEOUT_SECONDS", 2.5)
    monkeypatch.setattr(config, "MAX_PAGES", 7)

    instance = PaginationCrawler(FakePage([FakeResultPage()]))

    assert instance.first_timeout_seconds == 1.5
    assert instance.page_timeout_seconds == 2.5
    assert instance.max_pages == 7
