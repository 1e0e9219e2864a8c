"""Error code taxonomy for search failures.

These codes are returned in API error payloads and included in structured
logs. Treat them as stable identifiers for clients.
"""
from __future__ import annotations


class ErrorCode:
    AUTH_MISSING = "auth_missing"
    AUTH_INVALID = "auth_invalid"
    INVALID_PARAMS = "invalid_params"
    AUTOMATION = "automation_error"
    MAX_PAGES = "max_pages_exceeded"


__all__ = ["ErrorCode"]
