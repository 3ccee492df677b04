"""Query a Shiro Notes data export from the command line."""

# ruff: noqa: T201  # CLI writes JSON results to stdout

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
import sys
from typing import Any

import orjson
from pydantic import ValidationError

from shiro_search.adapters.document_store import load_corpus
from shiro_search.adapters.history_store import JsonFileHistoryStore
from shiro_search.config import Settings
from shiro_search.domain.search import SearchFilters
from shiro_search.engine import SearchEngine
from shiro_search.observability.logging import configure_logging


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shiro-search", description=__doc__)
    parser.add_argument("corpus", type=Path, help='JSON export with "books", "notes" and "events" arrays')
    parser.add_argument("--history", type=Path, help="JSON file used to persist search history")
    parser.add_argument("--log-level", default=None, help="Logging level (default: SHIRO_SEARCH_LOG_LEVEL or info)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit structured JSON logs")

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Full ranked search")
    search.add_argument("query")
    search.add_argument("--kind", default="all", help="all, book, note or event")
    search.add_argument("--date-range", default="all", help="all, week, month or year")
    search.add_argument("--tag", action="append", dest="tags", default=[], help="Tag filter (repeatable, any match)")
    search.add_argument("--encrypted", default="all", help="all, encrypted or unencrypted")

    quick = commands.add_parser("quick", help="Autocomplete results with snippets")
    quick.add_argument("query")
    quick.add_argument("--limit", type=int, default=None)

    tag = commands.add_parser("tag", help="Documents carrying a tag")
    tag.add_argument("name")

    tags = commands.add_parser("tags", help="All tags with usage counts")
    tags.add_argument("--match", default="", help="Only tags containing this text")

    commands.add_parser("history", help="Remembered queries, most recent first")
    return parser


def _dump(payload: Any) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")


def run(args: argparse.Namespace, settings: Settings) -> Any:
    store = load_corpus(args.corpus)
    history_store = JsonFileHistoryStore(args.history) if args.history else None
    engine = SearchEngine(store, settings, history_store=history_store)

    if args.command == "search":
        filters = SearchFilters(
            kind=args.kind,
            date_range=args.date_range,
            tags=args.tags,
            encrypted=args.encrypted,
        )
        return engine.search(args.query, filters).model_dump(mode="json")
    if args.command == "quick":
        return [hit.model_dump(mode="json") for hit in engine.quick_search(args.query, args.limit)]
    if args.command == "tag":
        return engine.search_by_tag(args.name).model_dump(mode="json")
    if args.command == "tags":
        tags = engine.suggest_tags(args.match, limit=sys.maxsize) if args.match else engine.get_all_tags()
        return [tag.model_dump(mode="json") for tag in tags]
    return engine.get_history()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 2

    configure_logging(
        args.log_level or settings.log_level,
        json_output=settings.json_logs if args.json_logs is None else args.json_logs,
    )

    try:
        payload = run(args, settings)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (orjson.JSONDecodeError, ValueError) as exc:
        print(f"Error: could not read corpus {args.corpus}: {exc}", file=sys.stderr)
        return 1

    _dump(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
