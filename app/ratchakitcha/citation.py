"""Parse gazette citation strings such as ``เล่ม ๑๔๐ ตอนพิเศษ ๕ ง หน้า ๑``.

The citation grammar has changed several times over the gazette's history and
the text carries no marker saying which era it belongs to. Each historical
form is described by a :class:`CitationGrammar`; :func:`parse_citation` tries
them in order and keeps the first match. Supporting a new form means adding a
grammar to :data:`CITATION_GRAMMARS`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .locale_utils import digits_to_arabic
from .utils import normalize_space

SPECIAL_ISSUE = "พิเศษ"

_NUM = r"([๐-๙0-9]+)"
# A lone consonant, optionally written against a following page or special
# issue clause. The "ห" of "หน้า" and the "พ" of "พิเศษ" are never letters.
_LETTER_END = r"(?=หน้า|พิเศษ|[^ก-๎]|$)"
_LETTER = rf"([ก-ฮ]){_LETTER_END}"
_BOOK = rf"เล่ม\s*{_NUM}"
_ISSUE = r"ตอน(?:ที่)?"
_PAGE = rf"หน้า\s*{_NUM}"


@dataclass(frozen=True)
class ParsedCitation:
    book_no: Optional[str] = None
    section: Optional[str] = None
    category: Optional[str] = None
    page_no: Optional[str] = None

    @property
    def matched(self) -> bool:
        return any(
            value is not None
            for value in (self.book_no, self.section, self.category, self.page_no)
        )


EMPTY_CITATION = ParsedCitation()


@dataclass(frozen=True)
class CitationGrammar:
    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str]], ParsedCitation]

    def parse(self, text: str) -> Optional[ParsedCitation]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return self.build(match)


def _arabic(value: Optional[str]) -> Optional[str]:
    return digits_to_arabic(value) if value else None


def _build_simple_legacy(match: re.Match[str]) -> ParsedCitation:
    return ParsedCitation(
        book_no=_arabic(match.group(1)),
        section=_arabic(match.group(2)),
        page_no=_arabic(match.group(3)),
    )


def _build_lettered_legacy(match: re.Match[str]) -> ParsedCitation:
    return ParsedCitation(
        book_no=_arabic(match.group(1)),
        category=match.group(2),
        page_no=_arabic(match.group(3)),
    )


def _build_modern(match: re.Match[str]) -> ParsedCitation:
    letter = match.group("letter")
    special = match.group("special_before") or match.group("special_after")
    category_parts = []
    if letter:
        category_parts.append(letter)
    if special:
        category_parts.append(SPECIAL_ISSUE)
    return ParsedCitation(
        book_no=_arabic(match.group("book")),
        section=_arabic(match.group("issue")),
        category=" ".join(category_parts) or None,
        page_no=_arabic(match.group("page")),
    )


def _modern_pattern(*, page_required: bool) -> re.Pattern[str]:
    page = rf"\s*หน้า\s*(?P<page>[๐-๙0-9]+)"
    if not page_required:
        page = rf"(?:{page})?"
    return re.compile(
        rf"เล่ม\s*(?P<book>[๐-๙0-9]+)\s*{_ISSUE}\s*(?:(?P<special_before>{SPECIAL_ISSUE})\s*)?"
        rf"(?P<issue>[๐-๙0-9]+)(?:\s*(?P<letter>[ก-ฮ]){_LETTER_END})?"
        rf"(?:\s*(?P<special_after>{SPECIAL_ISSUE}))?{page}"
    )


# Order matters: earlier grammars are stricter historical forms.
CITATION_GRAMMARS: tuple[CitationGrammar, ...] = (
    # Up to B.E. 2451: "เล่ม ๒๕ ตอนที่ ๓๙ หน้า ๑๑๔๑"
    CitationGrammar(
        "simple_legacy",
        re.compile(rf"{_BOOK}\s*{_ISSUE}\s*{_NUM}\s*{_PAGE}"),
        _build_simple_legacy,
    ),
    # B.E. 2452-2484: "เล่ม ๒๖ ก หน้า ๑๐๓"
    CitationGrammar(
        "lettered_legacy",
        re.compile(rf"{_BOOK}\s*{_LETTER}\s*{_PAGE}"),
        _build_lettered_legacy,
    ),
    # B.E. 2485 onwards; "พิเศษ" and the letter may come in either order.
    CitationGrammar("modern", _modern_pattern(page_required=True), _build_modern),
    CitationGrammar("modern_no_page", _modern_pattern(page_required=False), _build_modern),
)


def parse_citation(
    text: Optional[str], grammars: Sequence[CitationGrammar] = CITATION_GRAMMARS
) -> ParsedCitation:
    """Return the fields of the first grammar that matches ``text``.

    A citation that matches nothing yields an all-``None`` result; that is a
    normal outcome for entries without a usable citation.
    """

    candidate = normalize_space(text)
    if not candidate:
        return EMPTY_CITATION
    for grammar in grammars:
        parsed = grammar.parse(candidate)
        if parsed is not None:
            return parsed
    return EMPTY_CITATION


__all__ = [
    "SPECIAL_ISSUE",
    "ParsedCitation",
    "EMPTY_CITATION",
    "CitationGrammar",
    "CITATION_GRAMMARS",
    "parse_citation",
]
