from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, List, Optional

from .bootstrap_data import ensure_data
from .config import Settings
from .search import MIN_QUERY_LENGTH, search_strongs, search_verses
from .store import BibleStore

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler(sys.stderr)])

def _open_store(settings: Settings) -> BibleStore:
    store = BibleStore(settings.books_path, settings.verses_path, settings.strongs_path)
    store.load_sync()
    return store

def _print_json(obj: Any) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))

def _resolve(store: BibleStore, ident: str):
    book = store.resolve_book(ident)
    if book is None:
        print(f"Book not found: {ident}")
    return book

def cmd_fetch(args: argparse.Namespace) -> int:
    for p in ensure_data(args.settings):
        print(p)
    return 0

def cmd_stats(args: argparse.Namespace) -> int:
    store = _open_store(args.settings)
    counts = store.counts()
    counts["duplicate_verses"] = store.duplicate_verses
    if args.json:
        _print_json(counts)
        return 0
    for k, v in counts.items():
        print(f"{k}: {v:,}")
    return 0

def cmd_verse(args: argparse.Namespace) -> int:
    store = _open_store(args.settings)
    book = _resolve(store, args.book)
    if book is None:
        return 1
    v = store.get_verse(book.book_id, args.chapter, args.verse)
    if v is None:
        print("Verse not found.")
        return 1
    if args.json:
        _print_json(asdict(v))
        return 0
    print(v.reference)
    for code, text in v.translations().items():
        print(f"  [{code}] {text}")
    return 0

def cmd_chapter(args: argparse.Namespace) -> int:
    store = _open_store(args.settings)
    book = _resolve(store, args.book)
    if book is None:
        return 1
    if args.chapter < 1 or args.chapter > book.chapter_count:
        print(f"Invalid chapter. {book.book_name} has {book.chapter_count} chapters.")
        return 1
    verses = store.get_chapter(book.book_id, args.chapter)
    if args.json:
        _print_json([asdict(v) for v in verses])
        return 0
    print(f"{book.book_name} {args.chapter}")
    for v in verses:
        print(f"{v.verse:>3} {v.kjv_text or v.web_text}")
    return 0

def cmd_strongs(args: argparse.Namespace) -> int:
    store = _open_store(args.settings)
    d = store.get_strongs(args.number)
    if d is None:
        print(f"Strong's number {args.number} not found")
        return 1
    if args.json:
        _print_json(asdict(d))
        return 0
    print(f"{d.strongs_number}  {d.word}  ({d.part_of_speech})")
    print(d.gloss)
    return 0

def cmd_search(args: argparse.Namespace) -> int:
    if len(args.query) < MIN_QUERY_LENGTH:
        print(f"Search query must be at least {MIN_QUERY_LENGTH} characters")
        return 1
    store = _open_store(args.settings)

    if args.strongs:
        defs = search_strongs(store, args.query)
        if args.json:
            _print_json([asdict(d) for d in defs])
            return 0
        if not defs:
            print("No matches.")
        for d in defs:
            print(f"[{d.strongs_number}] {d.word}  {d.gloss.splitlines()[0] if d.gloss else ''}")
        return 0

    book_id: Optional[int] = None
    if args.book:
        book = _resolve(store, args.book)
        if book is None:
            return 1
        book_id = book.book_id

    verses = search_verses(store, args.query, limit=args.limit, book_id=book_id)
    if args.json:
        _print_json([asdict(v) for v in verses])
        return 0
    if not verses:
        print("No matches.")
        return 0
    for v in verses:
        print(f"{v.reference}")
        print(f"  {v.kjv_text or v.web_text}")
    return 0

def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn
    uvicorn.run(
        "biblemind.api:app",
        host=args.host or args.settings.host,
        port=args.port or args.settings.port,
        reload=args.reload,
        log_level=args.settings.log_level.lower(),
    )
    return 0

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="biblemind", description="Bible Mind: in-memory verse & Strong's lexicon API")
    p.add_argument("--data-dir", default=None, help="Directory holding the CSV sources (default: $BIBLE_DATA_DIR or .)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_f = sub.add_parser("fetch", help="Make sure the CSV sources exist (download when a Drive id is set)")
    p_f.set_defaults(func=cmd_fetch)

    p_st = sub.add_parser("stats", help="Load the data and print record counts")
    p_st.add_argument("--json", action="store_true", help="Output JSON")
    p_st.set_defaults(func=cmd_stats)

    p_v = sub.add_parser("verse", help="Show one verse in every available translation")
    p_v.add_argument("book", help="Book id, name, short name or USX code")
    p_v.add_argument("chapter", type=int)
    p_v.add_argument("verse", type=int)
    p_v.add_argument("--json", action="store_true", help="Output JSON")
    p_v.set_defaults(func=cmd_verse)

    p_c = sub.add_parser("chapter", help="Show a chapter")
    p_c.add_argument("book", help="Book id, name, short name or USX code")
    p_c.add_argument("chapter", type=int)
    p_c.add_argument("--json", action="store_true", help="Output JSON")
    p_c.set_defaults(func=cmd_chapter)

    p_sn = sub.add_parser("strongs", help="Look up a Strong's number (bare digits are Hebrew)")
    p_sn.add_argument("number")
    p_sn.add_argument("--json", action="store_true", help="Output JSON")
    p_sn.set_defaults(func=cmd_strongs)

    p_s = sub.add_parser("search", help="Search KJV/WEB verse text, or Strong's with --strongs")
    p_s.add_argument("query")
    p_s.add_argument("--strongs", action="store_true", help="Search Strong's definitions instead of verses")
    p_s.add_argument("--book", default=None, help="Restrict verse search to one book")
    p_s.add_argument("--limit", type=int, default=20)
    p_s.add_argument("--json", action="store_true", help="Output JSON")
    p_s.set_defaults(func=cmd_search)

    p_srv = sub.add_parser("serve", help="Run FastAPI server")
    p_srv.add_argument("--host", default=None)
    p_srv.add_argument("--port", type=int, default=None)
    p_srv.add_argument("--reload", action="store_true")
    p_srv.set_defaults(func=cmd_serve)

    return p

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.data_dir:
        # serve re-reads the environment in the uvicorn app
        os.environ["BIBLE_DATA_DIR"] = args.data_dir
    args.settings = Settings.from_env()

    configure_logging(args.settings.log_level)
    return args.func(args)

if __name__ == "__main__":
    raise SystemExit(main())
