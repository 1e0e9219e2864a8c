"""Configuration constants for the Royal Gazette search service."""
from __future__ import annotations

import os
from pathlib import Path

SEARCH_URL: str = os.getenv(
    "RATCHAKITCHA_SEARCH_URL", "https://ratchakitcha.soc.go.th/search-result"
)

# Bearer secret guarding the search API. Resolved once when the web app starts.
API_TOKEN: str = os.getenv("RATCHAKITCHA_API_TOKEN", "").strip()

PORT: int = int(os.getenv("PORT", "3000"))

_log_file_raw = os.getenv("RATCHAKITCHA_LOG_FILE", "").strip()
LOG_FILE: Path | None = Path(_log_file_raw) if _log_file_raw else None


def _parse_timeout_seconds(env_var: str, default: float, *, minimum: float = 0.1) -> float:
    """Parse a timeout value in seconds from the environment with bounds."""

    try:
        value = float(os.getenv(env_var, str(default)))
    except ValueError:
        return default
    return max(minimum, value)


# Bounded waits (seconds). Browser default timeouts are disabled, so these are
# the only waits that can end a crawl.
# Wait for the first result entry after submitting the form.
FIRST_RESULT_TIMEOUT_SECONDS: float = _parse_timeout_seconds(
    "RATCHAKITCHA_FIRST_RESULT_TIMEOUT_SECONDS", 5
)
# Wait for result entries on every subsequent page.
PAGE_RESULT_TIMEOUT_SECONDS: float = _parse_timeout_seconds(
    "RATCHAKITCHA_PAGE_RESULT_TIMEOUT_SECONDS", 10
)
# Wait for the search form itself to render.
SEARCH_FORM_TIMEOUT_SECONDS: float = _parse_timeout_seconds(
    "RATCHAKITCHA_SEARCH_FORM_TIMEOUT_SECONDS", 10
)
# Pause after filling the form so page validation listeners can run.
FORM_SETTLE_SECONDS: float = float(os.getenv("RATCHAKITCHA_FORM_SETTLE_SECONDS", "0.2"))

# 0 keeps pagination unbounded.
MAX_PAGES: int = int(os.getenv("RATCHAKITCHA_MAX_PAGES", "0"))

HEADLESS: bool = os.getenv("RATCHAKITCHA_HEADLESS", "1").strip().lower() not in {"0", "false"}
USER_AGENT: str = os.getenv(
    "RATCHAKITCHA_USER_AGENT", "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
)
VIEWPORT: dict[str, int] = {"width": 1280, "height": 800}
BROWSER_ARGS: list[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
]
