from __future__ import annotations

import re

import pytest

from app.ratchakitcha.citation import (
    CITATION_GRAMMARS,
    EMPTY_CITATION,
    CitationGrammar,
    ParsedCitation,
    parse_citation,
)


def test_simple_legacy_form() -> None:
    assert parse_citation("เล่ม ๒๕ ตอนที่ ๓๙ หน้า ๑๑๔๑") == ParsedCitation(
        book_no="25", section="39", category=None, page_no="1141"
    )


def test_lettered_legacy_form() -> None:
    assert parse_citation("เล่ม ๒๖ ก หน้า ๑๐๓") == ParsedCitation(
        book_no="26", section=None, category="ก", page_no="103"
    )


def test_modern_form_with_special_issue_before_number() -> None:
    parsed = parse_citation("เล่ม ๑๔๐ ตอนพิเศษ ๕ ง หน้า ๑")
    assert parsed.book_no == "140"
    assert parsed.section == "5"
    assert parsed.category == "ง พิเศษ"
    assert parsed.page_no == "1"


def test_modern_form_with_special_issue_after_letter() -> None:
    parsed = parse_citation("เล่ม ๑๔๐ ตอนที่ ๕ ง พิเศษ หน้า ๑")
    assert parsed == ParsedCitation(book_no="140", section="5", category="ง พิเศษ", page_no="1")


def test_modern_form_letter_only() -> None:
    assert parse_citation("เล่ม ๑๓๕ ตอนที่ ๑๒ ก หน้า ๓") == ParsedCitation(
        book_no="135", section="12", category="ก", page_no="3"
    )


def test_modern_form_special_without_letter() -> None:
    parsed = parse_citation("เล่ม ๑๓๕ ตอนพิเศษ ๘ หน้า ๒๐")
    assert parsed.section == "8"
    assert parsed.category == "พิเศษ"
    assert parsed.page_no == "20"


def test_modern_form_without_page() -> None:
    assert parse_citation("เล่ม ๑๔๐ ตอนที่ ๓๒ ข") == ParsedCitation(
        book_no="140", section="32", category="ข", page_no=None
    )


def test_page_keyword_is_not_a_category_letter() -> None:
    parsed = parse_citation("เล่ม ๑๔๐ ตอนที่ ๓๒ หน้าx")
    assert parsed.section == "32"
    assert parsed.category is None
    assert parsed.page_no is None


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "เล่ม ๑๔๐ ตอนที่ ๕ งหน้า ๑",
            ParsedCitation(book_no="140", section="5", category="ง", page_no="1"),
        ),
        (
            "เล่ม ๑๔๐ ตอนที่ ๕ งพิเศษ หน้า ๒",
            ParsedCitation(book_no="140", section="5", category="ง พิเศษ", page_no="2"),
        ),
        (
            "เล่ม ๒๖ กหน้า ๑๐๓",
            ParsedCitation(book_no="26", category="ก", page_no="103"),
        ),
    ],
)
def test_letter_written_against_following_clause(text, expected) -> None:
    assert parse_citation(text) == expected


def test_citation_split_across_spans_is_joined() -> None:
    parsed = parse_citation("เล่ม ๑๔๑\n   ตอนที่ ๓ ก   หน้า ๑")
    assert parsed == ParsedCitation(book_no="141", section="3", category="ก", page_no="1")


def test_arabic_digits_are_accepted() -> None:
    assert parse_citation("เล่ม 140 ตอนที่ 5 ง หน้า 12").page_no == "12"


@pytest.mark.parametrize("text", [None, "", "ไม่มีข้อมูลอ้างอิง", "หน้า ๑"])
def test_unmatched_text_yields_all_none(text) -> None:
    parsed = parse_citation(text)
    assert parsed == EMPTY_CITATION
    assert parsed.matched is False


def test_no_thai_digits_leak_into_output() -> None:
    parsed = parse_citation("เล่ม ๑๒๓ ตอนที่ ๔๕ ค หน้า ๖๗๘๙")
    for value in (parsed.book_no, parsed.section, parsed.page_no):
        assert value is not None
        assert value.isascii() and value.isdigit()


def test_grammar_order_is_stable() -> None:
    assert [g.name for g in CITATION_GRAMMARS] == [
        "simple_legacy",
        "lettered_legacy",
        "modern",
        "modern_no_page",
    ]


def test_additional_grammar_can_be_appended() -> None:
    roman = CitationGrammar(
        "volume_only",
        re.compile(r"vol\.\s*(\d+)"),
        lambda m: ParsedCitation(book_no=m.group(1)),
    )
    grammars = CITATION_GRAMMARS + (roman,)

    assert parse_citation("vol. 7", grammars).book_no == "7"
    assert parse_citation("เล่ม ๒๖ ก หน้า ๑๐๓", grammars).category == "ก"
