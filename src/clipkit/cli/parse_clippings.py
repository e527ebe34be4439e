"""CLI entrypoint for parsing a clippings export into JSON records."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging

from dotenv import load_dotenv

load_dotenv()

from clipkit.importing.clippings_importer import ClippingsImporter, ClippingsImportError
from clipkit.parsing.models import CLIPPING_TYPES
from clipkit.parsing.options import TAG_CASES, ParseOptions


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse an e-reader clippings export into annotation records")
    parser.add_argument("--path", required=True, help="Path to the clippings text file")
    parser.add_argument("--language", default=None, help="Language code or 'auto'")
    parser.add_argument("--keep-duplicates", action="store_true", help="Flag exact duplicates instead of removing them")
    parser.add_argument("--no-merge-notes", action="store_true", help="Do not link notes to highlights")
    parser.add_argument("--remove-linked-notes", action="store_true", help="Drop notes embedded in a highlight")
    parser.add_argument("--extract-tags", action="store_true", help="Extract tags from linked notes")
    parser.add_argument("--tag-case", choices=TAG_CASES, default=None, help="Case applied to extracted tags")
    parser.add_argument(
        "--no-merge-overlapping",
        action="store_true",
        help="Flag overlapping highlights instead of merging them",
    )
    parser.add_argument("--highlights-only", action="store_true", help="Keep only highlights in the output")
    parser.add_argument("--exclude-type", action="append", choices=CLIPPING_TYPES, default=[], help="Type to drop")
    parser.add_argument("--exclude-book", action="append", default=[], help="Title substring to drop")
    parser.add_argument("--only-book", action="append", default=[], help="Title substring to keep")
    parser.add_argument("--min-length", type=int, default=None, help="Minimum content length for non-bookmarks")
    parser.add_argument("--similarity-threshold", type=float, default=None, help="Fuzzy-duplicate threshold")
    parser.add_argument("--strict", action="store_true", help="Fail when any parse warning is produced")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics on stderr")
    return parser


def _options_from_args(args: argparse.Namespace) -> ParseOptions:
    options = ParseOptions.from_env()
    overrides: dict[str, object] = {}
    if args.language is not None:
        overrides["language"] = args.language
    if args.keep_duplicates:
        overrides["remove_duplicates"] = False
    if args.no_merge_notes:
        overrides["merge_notes"] = False
    if args.remove_linked_notes:
        overrides["remove_linked_notes"] = True
    if args.extract_tags:
        overrides["extract_tags"] = True
    if args.tag_case is not None:
        overrides["tag_case"] = args.tag_case
    if args.no_merge_overlapping:
        overrides["merge_overlapping"] = False
    if args.highlights_only:
        overrides["highlights_only"] = True
    if args.exclude_type:
        overrides["exclude_types"] = tuple(args.exclude_type)
    if args.exclude_book:
        overrides["exclude_books"] = tuple(args.exclude_book)
    if args.only_book:
        overrides["only_books"] = tuple(args.only_book)
    if args.min_length is not None:
        overrides["min_content_length"] = args.min_length
    if args.similarity_threshold is not None:
        overrides["similarity_threshold"] = args.similarity_threshold
    if args.strict:
        overrides["strict"] = True
    return replace(options, **overrides)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
    )

    payload: dict[str, object] = {
        "path": args.path,
        "language": None,
        "records": [],
        "warnings": [],
        "stats": None,
        "meta": None,
        "errors": [],
    }

    try:
        options = _options_from_args(args)
    except ValueError as exc:
        payload["errors"] = [{"code": "INVALID_OPTIONS", "message": str(exc)}]
        print(json.dumps(payload, ensure_ascii=True, indent=2))
        return 2

    payload["language"] = options.language
    try:
        result = ClippingsImporter(options).import_path(args.path)
    except ClippingsImportError as exc:
        payload["warnings"] = [warning.to_dict() for warning in exc.warnings]
        payload["errors"] = [{"code": exc.code, "message": str(exc)}]
        print(json.dumps(payload, ensure_ascii=True, indent=2))
        return 1

    payload.update(result.to_dict())
    payload["language"] = result.meta.detected_language
    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
