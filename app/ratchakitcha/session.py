"""One isolated Playwright browser session per search request."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from playwright.sync_api import Browser, BrowserContext, Page, sync_playwright

from . import config
from .logging_utils import _crawl_event
from .utils import log_line


@dataclass
class SessionConfig:
    headless: bool = True
    user_agent: str = config.USER_AGENT
    viewport: Optional[dict[str, int]] = None
    args: tuple[str, ...] = ()

    @classmethod
    def from_config(cls) -> "SessionConfig":
        return cls(
            headless=config.HEADLESS,
            user_agent=config.USER_AGENT,
            viewport=dict(config.VIEWPORT),
            args=tuple(config.BROWSER_ARGS),
        )


@dataclass
class BrowserSession:
    playwright: Any
    browser: Optional[Browser]
    context: Optional[BrowserContext]
    page: Page
    released: bool = False


def acquire(session_config: Optional[SessionConfig] = None) -> BrowserSession:
    """Launch Chromium and open a configured page.

    Browser default timeouts are disabled; callers pass explicit timeouts for
    the waits that must be bounded.
    """

    cfg = session_config or SessionConfig.from_config()
    pw = sync_playwright().start()
    browser: Optional[Browser] = None
    try:
        browser = pw.chromium.launch(headless=cfg.headless, args=list(cfg.args))
        context = browser.new_context(
            user_agent=cfg.user_agent,
            viewport=cfg.viewport,
        )
        context.set_default_timeout(0)
        context.set_default_navigation_timeout(0)
        page = context.new_page()
    except Exception:
        # Nobody else holds these handles yet; close them before re-raising.
        if browser is not None:
            try:
                browser.close()
            except Exception as exc:  # noqa: BLE001
                log_line(f"[SESSION] Failed to close browser after launch error: {exc}")
        pw.stop()
        raise

    _crawl_event("session", step="acquired", headless=cfg.headless)
    return BrowserSession(playwright=pw, browser=browser, context=context, page=page)


def release(session: Optional[BrowserSession]) -> None:
    """Close ``session``. Safe to call twice; never raises."""

    if session is None or session.released:
        return
    session.released = True

    for label, closer in (
        ("context", session.context),
        ("browser", session.browser),
        ("playwright", session.playwright),
    ):
        if closer is None:
            continue
        try:
            if label == "playwright":
                closer.stop()
            else:
                closer.close()
        except Exception as exc:  # noqa: BLE001
            log_line(f"[SESSION] Ignoring error while closing {label}: {exc}")
            _crawl_event("error", phase="session", step="release", target=label, error=str(exc))

    _crawl_event("session", step="released")


@contextmanager
def browser_session(session_config: Optional[SessionConfig] = None) -> Iterator[BrowserSession]:
    """Yield a fresh session and release it on every exit path."""

    session = acquire(session_config)
    try:
        yield session
    finally:
        release(session)


__all__ = ["SessionConfig", "BrowserSession", "acquire", "release", "browser_session"]
