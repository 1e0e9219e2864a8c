"""Command line entry point for running a gazette search without the API."""
from __future__ import annotations

import argparse
import json
from typing import Sequence

from .config_validation import validate_runtime_config
from .errors import SearchError, ValidationError
from .models import parse_advanced_query, parse_category_query
from .search import build_payload, not_found_payload, run_search

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_SEARCH_ERROR = 3


def _build_parser() -> argparse.ArgumentParser:
    """Return an argument parser with one sub-command per search type."""

    parser = argparse.ArgumentParser(
        description="Search the Royal Gazette and print the records as JSON.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    category = sub.add_parser("category", help="Search by document category.")
    category.add_argument("category", help="Category code 1-5.")
    category.add_argument("--date-from", dest="date-from")
    category.add_argument("--date-to", dest="date-to")

    advanced = sub.add_parser("advanced", help="Search by title, type, book or session.")
    advanced.add_argument("--title")
    advanced.add_argument(
        "--type",
        action="append",
        default=[],
        help="Document type value; may be repeated.",
    )
    advanced.add_argument("--book-no", dest="bookNo")
    advanced.add_argument("--part")
    advanced.add_argument("--part-extra", dest="partExtra")
    advanced.add_argument("--date-begin", dest="dateBegin")
    advanced.add_argument("--date-end", dest="dateEnd")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    params = {key: value for key, value in vars(args).items() if key != "command"}

    try:
        if args.command == "category":
            request = parse_category_query(params)
        else:
            request = parse_advanced_query(params)
    except ValidationError as exc:
        parser.error(exc.message)

    validate_runtime_config("cli")

    try:
        result = run_search(request)
    except SearchError as exc:
        print(json.dumps(exc.to_payload(), ensure_ascii=False, indent=2))
        return EXIT_SEARCH_ERROR

    if not result.found:
        print(json.dumps(not_found_payload(), ensure_ascii=False, indent=2))
        return EXIT_NOT_FOUND

    print(json.dumps(build_payload(result, request), ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
