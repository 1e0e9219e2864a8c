"""Bearer token guard for the search API."""
from __future__ import annotations

import hmac
from functools import wraps
from typing import Any, Callable, Optional

from flask import current_app, request

from .error_codes import ErrorCode
from .errors import AuthError
from .logging_utils import _crawl_event


def check_bearer_token(header: Optional[str], expected: str) -> None:
    """Raise :class:`AuthError` unless ``header`` carries ``expected``.

    A missing or non-Bearer header is a 401; a wrong token is a 403.
    """

    if not header or not header.startswith("Bearer "):
        raise AuthError(
            ErrorCode.AUTH_MISSING,
            "Unauthorized: Missing or invalid Authorization header",
            http_status=401,
        )
    token = header[len("Bearer "):].strip()
    if not expected or not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError(ErrorCode.AUTH_INVALID, "Forbidden: Invalid token", http_status=403)


def require_bearer_token(view: Callable[..., Any]) -> Callable[..., Any]:
    """Check the request's Authorization header against ``API_TOKEN``."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            check_bearer_token(
                request.headers.get("Authorization"),
                current_app.config.get("API_TOKEN") or "",
            )
        except AuthError as exc:
            _crawl_event(
                "error",
                phase="auth",
                error=exc.error_code,
                path=request.path,
                remote_addr=request.remote_addr,
            )
            raise
        return view(*args, **kwargs)

    return wrapper


__all__ = ["check_bearer_token", "require_bearer_token"]
