from __future__ import annotations

from typing import Literal

from . import config
from .logging_utils import _crawl_event
from .utils import log_line

Entrypoint = Literal["web", "cli", "tests"]


def _raise_config_error(message: str, *, entrypoint: Entrypoint, error: str) -> None:
    _crawl_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        entrypoint=entrypoint,
    )
    log_line(f"[CONFIG] {message} (entrypoint={entrypoint})")
    raise ValueError(message)


def validate_runtime_config(entrypoint: Entrypoint) -> None:
    """Validate runtime configuration for the given entrypoint.

    Raises ``ValueError`` when a blocking misconfiguration is detected.
    Non-fatal adjustments are logged but do not raise.
    """

    if entrypoint == "web" and not config.API_TOKEN:
        _raise_config_error(
            "RATCHAKITCHA_API_TOKEN must be set for the web API.",
            entrypoint=entrypoint,
            error="api_token_missing",
        )

    if not config.SEARCH_URL.startswith(("http://", "https://")):
        _raise_config_error(
            "RATCHAKITCHA_SEARCH_URL must be an http(s) URL.",
            entrypoint=entrypoint,
            error="search_url_invalid",
        )

    if config.MAX_PAGES < 0:
        _raise_config_error(
            "RATCHAKITCHA_MAX_PAGES must be zero (unlimited) or positive.",
            entrypoint=entrypoint,
            error="max_pages_invalid",
        )

    if config.FORM_SETTLE_SECONDS < 0:
        _crawl_event(
            "state",
            phase="config",
            context="runtime_validation",
            kind="config_adjustment",
            field="FORM_SETTLE_SECONDS",
            value=config.FORM_SETTLE_SECONDS,
            adjusted=0.0,
            entrypoint=entrypoint,
        )
        log_line("[CONFIG] FORM_SETTLE_SECONDS < 0; clamping to 0.")
        config.FORM_SETTLE_SECONDS = 0.0

    timeout_fields = [
        ("FIRST_RESULT_TIMEOUT_SECONDS", config.FIRST_RESULT_TIMEOUT_SECONDS),
        ("PAGE_RESULT_TIMEOUT_SECONDS", config.PAGE_RESULT_TIMEOUT_SECONDS),
        ("SEARCH_FORM_TIMEOUT_SECONDS", config.SEARCH_FORM_TIMEOUT_SECONDS),
    ]

    for field_name, value in timeout_fields:
        if value <= 0:
            _raise_config_error(
                f"{field_name} must be greater than zero.",
                entrypoint=entrypoint,
                error="invalid_timeout",
            )


__all__ = ["validate_runtime_config", "Entrypoint"]
