"""Exceptions raised by the search service and mapped onto API responses."""
from __future__ import annotations

from typing import Any, Optional

from .error_codes import ErrorCode

SERVER_ERROR_MESSAGE = "เกิดข้อผิดพลาดจากฝั่งเซิร์ฟเวอร์"


class SearchError(Exception):
    http_status = 500

    def __init__(
        self,
        error_code: str,
        message: str,
        *,
        http_status: int | None = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.detail = detail
        if http_status is not None:
            self.http_status = http_status

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.http_status,
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.detail:
            payload["detail"] = self.detail
        return payload


class AuthError(SearchError):
    """Missing, malformed or incorrect bearer credential."""

    http_status = 401


class ValidationError(SearchError):
    http_status = 400

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_PARAMS, message)


class AutomationError(SearchError):
    """Browser session setup, form filling, navigation or extraction failed."""

    def __init__(self, cause: BaseException | str) -> None:
        super().__init__(ErrorCode.AUTOMATION, SERVER_ERROR_MESSAGE, detail=str(cause))


class MaxPagesExceededError(SearchError):
    def __init__(self, max_pages: int) -> None:
        super().__init__(
            ErrorCode.MAX_PAGES,
            SERVER_ERROR_MESSAGE,
            detail=f"pagination exceeded {max_pages} pages",
        )
        self.max_pages = max_pages


__all__ = [
    "SERVER_ERROR_MESSAGE",
    "SearchError",
    "AuthError",
    "ValidationError",
    "AutomationError",
    "MaxPagesExceededError",
]
