"""Thai numeral and Buddhist-era date helpers."""
from __future__ import annotations

from typing import Optional

from .utils import normalize_space

BUDDHIST_ERA_OFFSET = 543

_THAI_DIGITS = str.maketrans("๐๑๒๓๔๕๖๗๘๙", "0123456789")

THAI_MONTHS: dict[str, str] = {
    "ม.ค.": "01", "ม.ค": "01",
    "ก.พ.": "02", "ก.พ": "02",
    "มี.ค.": "03", "มี.ค": "03",
    "เม.ย.": "04", "เม.ย": "04",
    "พ.ค.": "05", "พ.ค": "05",
    "มิ.ย.": "06", "มิ.ย": "06",
    "ก.ค.": "07", "ก.ค": "07",
    "ส.ค.": "08", "ส.ค": "08",
    "ก.ย.": "09", "ก.ย": "09",
    "ต.ค.": "10", "ต.ค": "10",
    "พ.ย.": "11", "พ.ย": "11",
    "ธ.ค.": "12", "ธ.ค": "12",
}


def digits_to_arabic(text: str) -> str:
    """Replace Thai numeral glyphs with Arabic digits, leaving everything else."""

    return text.translate(_THAI_DIGITS)


def _is_number(text: str) -> bool:
    return text.isascii() and text.isdigit()


def parse_thai_date(value: str) -> Optional[str]:
    """Convert ``"๑๕ ม.ค. ๒๕๖๗"`` style dates into ``"2024-01-15"``.

    Returns ``None`` when fewer than three whitespace separated tokens are
    present, or when the day or year is not a number. An unknown month name
    is encoded as ``"00"`` rather than dropped, so the caller can still see
    the day and year.
    """

    parts = normalize_space(value).split(" ")
    if len(parts) < 3:
        return None

    day_raw, month_raw, year_raw = parts[:3]
    day = digits_to_arabic(day_raw)
    year_digits = digits_to_arabic(year_raw)
    if not (_is_number(day) and len(day) <= 2 and _is_number(year_digits)):
        return None
    year = int(year_digits) - BUDDHIST_ERA_OFFSET
    if year < 0:
        return None
    month = THAI_MONTHS.get(month_raw, "00")
    return f"{year:04d}-{month}-{day.zfill(2)}"


__all__ = ["BUDDHIST_ERA_OFFSET", "THAI_MONTHS", "digits_to_arabic", "parse_thai_date"]
