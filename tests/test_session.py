from __future__ import annotations

from typing import Any

import pytest

from app.ratchakitcha import session
from app.ratchakitcha.session import BrowserSession, SessionConfig


class _Closable:
    def __init__(self, name: str, log: list[str], *, fail: bool = False) -> None:
        self.name = name
        self.log = log
        self.fail = fail

    def close(self) -> None:
        self.log.append(f"close:{self.name}")
        if self.fail:
            raise RuntimeError(f"{self.name} already gone")

    def stop(self) -> None:
        self.log.append(f"stop:{self.name}")
        if self.fail:
            raise RuntimeError(f"{self.name} already gone")


class FakeContext(_Closable):
    def __init__(self, log: list[str], **options: Any) -> None:
        super().__init__("context", log)
        self.options = options
        self.timeouts: dict[str, float] = {}

    def set_default_timeout(self, value: float) -> None:
        self.timeouts["default"] = value

    def set_default_navigation_timeout(self, value: float) -> None:
        self.timeouts["navigation"] = value

    def new_page(self) -> str:
        return "page"


class FakeBrowser(_Closable):
    def __init__(self, log: list[str], *, fail_context: bool = False) -> None:
        super().__init__("browser", log)
        self.fail_context = fail_context
        self.context: FakeContext | None = None

    def new_context(self, **options: Any) -> FakeContext:
        if self.fail_context:
            raise RuntimeError("context failed")
        self.context = FakeContext(self.log, **options)
        return self.context


class FakeChromium:
    def __init__(self, browser: FakeBrowser) -> None:
        self.browser = browser
        self.launch_kwargs: dict[str, Any] = {}

    def launch(self, **kwargs: Any) -> FakeBrowser:
        self.launch_kwargs = kwargs
        return self.browser


class FakePlaywright(_Closable):
    def __init__(self, browser: FakeBrowser, log: list[str]) -> None:
        super().__init__("playwright", log)
        self.chromium = FakeChromium(browser)


def _install(monkeypatch: pytest.MonkeyPatch, *, fail_context: bool = False):
    log: list[str] = []
    browser = FakeBrowser(log, fail_context=fail_context)
    pw = FakePlaywright(browser, log)

    class _Starter:
        def start(self) -> FakePlaywright:
            return pw

    monkeypatch.setattr(session, "sync_playwright", lambda: _Starter())
    return pw, browser, log


def test_acquire_configures_isolated_session(monkeypatch: pytest.MonkeyPatch) -> None:
    pw, browser, _log = _install(monkeypatch)
    cfg = SessionConfig(
        headless=True,
        user_agent="UA/1.0",
        viewport={"width": 1280, "height": 800},
        args=("--no-sandbox", "--disable-setuid-sandbox"),
    )

    result = session.acquire(cfg)

    assert result.page == "page"
    assert pw.chromium.launch_kwargs == {
        "headless": True,
        "args": ["--no-sandbox", "--disable-setuid-sandbox"],
    }
    assert browser.context.options == {
        "user_agent": "UA/1.0",
        "viewport": {"width": 1280, "height": 800},
    }
    assert browser.context.timeouts == {"default": 0, "navigation": 0}


def test_acquire_failure_cleans_up_and_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _pw, _browser, log = _install(monkeypatch, fail_context=True)

    with pytest.raises(RuntimeError, match="context failed"):
        session.acquire(SessionConfig())

    assert log == ["close:browser", "stop:playwright"]


def test_release_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch)
    acquired = session.acquire(SessionConfig())
    log = acquired.browser.log

    session.release(acquired)
    session.release(acquired)

    assert log == ["close:context", "close:browser", "stop:playwright"]
    assert acquired.released is True


def test_release_swallows_close_errors() -> None:
    log: list[str] = []
    broken = BrowserSession(
        playwright=_Closable("playwright", log),
        browser=_Closable("browser", log, fail=True),
        context=_Closable("context", log, fail=True),
        page=None,
    )

    session.release(broken)

    assert log == ["close:context", "close:browser", "stop:playwright"]


def test_release_none_is_noop() -> None:
    session.release(None)


def test_browser_session_releases_on_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _pw, browser, log = _install(monkeypatch)

    with pytest.raises(ValueError):
        with session.browser_session(SessionConfig()):
            raise ValueError("boom")

    assert log == ["close:context", "close:browser", "stop:playwright"]


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = SessionConfig.from_config()
    assert cfg.viewport == {"width": 1280, "height": 800}
    assert "--no-sandbox" in cfg.args
