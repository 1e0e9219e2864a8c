"""Search requests and result records for the gazette search API."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Union

from .errors import ValidationError

CATEGORY_MAP: dict[str, str] = {
    "1": "รัฐธรรมนูญ",
    "2": "พระราชบัญญัติ",
    "3": "พระราชกำหนด",
    "4": "พระราชกฤษฎีกา",
    "5": "กฎกระทรวงและอื่นๆ",
}

RecordLayout = Literal["category", "advanced"]


@dataclass(frozen=True)
class CategorySearch:
    category: str
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    layout: RecordLayout = field(default="category", init=False)

    @property
    def category_name(self) -> str:
        return CATEGORY_MAP[self.category]


@dataclass(frozen=True)
class AdvancedSearch:
    title: Optional[str] = None
    document_types: tuple[str, ...] = ()
    book_no: Optional[str] = None
    session_no: Optional[str] = None
    extra_session_no: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    # Accepted for compatibility; the search form has no matching control.
    search_field: Optional[str] = None

    layout: RecordLayout = field(default="advanced", init=False)

    def has_criteria(self) -> bool:
        return bool(
            self.title
            or self.document_types
            or self.book_no
            or self.session_no
            or self.extra_session_no
            or self.date_from
            or self.date_to
        )


SearchRequest = Union[CategorySearch, AdvancedSearch]


@dataclass
class ResultRecord:
    no: int
    title: Optional[str] = None
    book_no: Optional[str] = None
    section: Optional[str] = None
    category: Optional[str] = None
    publish_date: Optional[str] = None
    page_no: Optional[str] = None
    file_path: Optional[str] = None

    def section_label(self) -> Optional[str]:
        """Issue number followed by its annotation, e.g. ``"5 ง พิเศษ"``.

        A citation without an issue number (the lettered legacy form) has no
        label; its letter alone does not identify an issue.
        """

        if not self.section:
            return None
        return " ".join(part for part in (self.section, self.category) if part)

    def to_dict(self, layout: RecordLayout = "advanced") -> dict[str, Any]:
        """Serialise with the API's key names.

        The category layout has no ``category`` key; the annotation is folded
        into ``section`` after the issue number instead.
        """

        if layout == "category":
            return {
                "no": self.no,
                "doctitle": self.title,
                "bookNo": self.book_no,
                "section": self.section_label(),
                "publishDate": self.publish_date,
                "pageNo": self.page_no,
                "filePath": self.file_path,
            }
        return {
            "no": self.no,
            "doctitle": self.title,
            "bookNo": self.book_no,
            "section": self.section,
            "category": self.category,
            "publishDate": self.publish_date,
            "pageNo": self.page_no,
            "filePath": self.file_path,
        }


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first(args: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = _clean(args.get(key))
        if value:
            return value
    return None


def _get_list(args: Mapping[str, Any], key: str) -> tuple[str, ...]:
    getlist = getattr(args, "getlist", None)
    if callable(getlist):
        raw = getlist(key)
    else:
        raw = args.get(key)
        if raw is None:
            raw = []
        elif isinstance(raw, str):
            raw = [raw]
    return tuple(value for value in (_clean(item) for item in raw) if value)


def parse_category_query(args: Mapping[str, Any]) -> CategorySearch:
    """Build a :class:`CategorySearch` from query parameters.

    Raises :class:`ValidationError` when ``category`` is missing or unknown.
    """

    category = _clean(args.get("category"))
    if not category:
        raise ValidationError("ต้องระบุพารามิเตอร์ category (1-5)")
    if category not in CATEGORY_MAP:
        raise ValidationError("category ต้องเป็น 1-5 เท่านั้น")
    return CategorySearch(
        category=category,
        date_from=_first(args, "date-from", "dateFrom"),
        date_to=_first(args, "date-to", "dateTo"),
    )


def parse_advanced_query(args: Mapping[str, Any]) -> AdvancedSearch:
    """Build an :class:`AdvancedSearch`; at least one criterion is required."""

    request = AdvancedSearch(
        title=_clean(args.get("title")),
        document_types=_get_list(args, "type"),
        book_no=_clean(args.get("bookNo")),
        session_no=_clean(args.get("part")),
        extra_session_no=_clean(args.get("partExtra")),
        date_from=_clean(args.get("dateBegin")),
        date_to=_clean(args.get("dateEnd")),
        search_field=_clean(args.get("searchField")),
    )
    if not request.has_criteria():
        raise ValidationError("กรุณาระบุอย่างน้อยหนึ่งพารามิเตอร์ เช่น ?title=...")
    return request


__all__ = [
    "CATEGORY_MAP",
    "CategorySearch",
    "AdvancedSearch",
    "SearchRequest",
    "ResultRecord",
    "parse_category_query",
    "parse_advanced_query",
]
