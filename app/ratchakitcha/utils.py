from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

from . import config

LOGGER = logging.getLogger("ratchakitcha")
_LOGGER_INITIALISED = False

_WHITESPACE = re.compile(r"\s+")


def _configure_logger(log_path: Path | None) -> None:
    """Configure the shared application logger, optionally mirroring to ``log_path``."""

    global _LOGGER_INITIALISED

    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        try:
            handler.close()
        except Exception:  # noqa: BLE001
            continue

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    LOGGER.addHandler(stream_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        LOGGER.addHandler(file_handler)

    LOGGER.setLevel(logging.INFO)
    LOGGER.propagate = False
    _LOGGER_INITIALISED = True


def _ensure_logger() -> None:
    """Initialise the logger lazily using the configured log file."""

    if _LOGGER_INITIALISED:
        return
    _configure_logger(config.LOG_FILE)


def log_line(message: str) -> None:
    """Write a timestamped log line to stdout and the log file, if any."""

    _ensure_logger()
    LOGGER.info(message)


def normalize_space(text: str | None) -> str:
    """Collapse runs of whitespace into single spaces and strip the ends."""

    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


__all__ = ["LOGGER", "log_line", "normalize_space"]
