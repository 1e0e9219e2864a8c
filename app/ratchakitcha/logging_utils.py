from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from .utils import log_line


def _render(value: Any) -> str:
    # Crawl states and stop reasons are logged by their wire value.
    if isinstance(value, Enum):
        value = value.value
    return repr(value)


def _crawl_event(
    label: str = "",
    *,
    phase: Optional[str] = None,
    page: Optional[int] = None,
    **fields: Any,
) -> None:
    """Emit one ``[CRAWL][LABEL]`` log line.

    ``page`` is the 1-based result page the event belongs to and is rendered
    in the prefix (``[CRAWL][STATE][p3]``) so a crawl can be followed page by
    page. ``phase`` names the stage (crawl, form, session, api...) and stands
    in for the label when no label is given.
    """

    try:
        tag = (label or phase or "").upper()
        if phase and label:
            fields.setdefault("phase", phase)
        prefix = f"[CRAWL][{tag}]" + (f"[p{page}]" if page is not None else "")
        payload = ", ".join(f"{k}={_render(v)}" for k, v in sorted(fields.items()))
        log_line(f"{prefix} {payload}")
    except Exception:
        # Never let logging break a crawl.
        return


__all__ = ["_crawl_event"]
