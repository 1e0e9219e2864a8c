"""Run one gazette search end to end inside a dedicated browser session."""
from __future__ import annotations

from typing import Any, Optional

from . import form_driver
from . import session as session_manager
from .crawler import CrawlResult, crawl_results
from .errors import AutomationError, SearchError
from .logging_utils import _crawl_event
from .models import SearchRequest
from .utils import log_line

NOT_FOUND_MESSAGE = "ไม่พบข้อมูล"


def run_search(
    request: SearchRequest,
    *,
    session_config: Optional[session_manager.SessionConfig] = None,
) -> CrawlResult:
    """Submit ``request`` and crawl every result page.

    An empty result set is reported through ``CrawlResult.found``. Any other
    failure is raised as :class:`AutomationError`. The browser session is
    released exactly once whichever way this returns.
    """

    _crawl_event("search", step="start", layout=request.layout)
    browser_session: Optional[session_manager.BrowserSession] = None
    try:
        browser_session = session_manager.acquire(session_config)
        page = browser_session.page
        form_driver.open_search_page(page)
        form_driver.fill_and_submit(page, request)
        result = crawl_results(page)
    except SearchError:
        raise
    except Exception as exc:  # noqa: BLE001
        log_line(f"[SEARCH] Automation failed: {type(exc).__name__}: {exc}")
        _crawl_event("error", phase="search", error=type(exc).__name__, message=str(exc))
        raise AutomationError(exc) from exc
    finally:
        session_manager.release(browser_session)

    _crawl_event(
        "search",
        step="done",
        layout=request.layout,
        pages=result.pages,
        total=result.total,
        stop_reason=result.stop_reason,
    )
    return result


def build_payload(result: CrawlResult, request: SearchRequest) -> dict[str, Any]:
    return {
        "status": 200,
        "totalItem": result.total,
        "rkjs": [record.to_dict(request.layout) for record in result.records],
    }


def not_found_payload() -> dict[str, Any]:
    return {"status": 404, "error": NOT_FOUND_MESSAGE}


__all__ = ["NOT_FOUND_MESSAGE", "run_search", "build_payload", "not_found_payload"]
