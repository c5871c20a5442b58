from __future__ import annotations
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .csvparse import iter_strongs_records, read_csv_rows
from .models import Book, StrongsDefinition, Verse

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

STRONGS_FIELD_COUNT = 9

# Verse attribute -> interlinear table column
VERSE_TEXT_COLUMNS: Dict[str, str] = {
    "kjv_text": "king_james_bible_kjv",
    "web_text": "world_english_bible_web",
    "hebrew_text": "leningrad_codex",
    "jps_text": "jewish_publication_society_jps",
    "greek_text": "codex_alexandrinus",
    "brenton_text": "brenton",
    "samaritan_text": "samaritan_pentateuch",
    "samaritan_english": "samaritan_pentateuch_english",
    "onkelos_aramaic": "onkelos_aramaic",
    "onkelos_english": "onkelos_english",
}

def to_int(value: Optional[str]) -> int:
    """Leading integer of value, or 0 when there is none."""
    if not value:
        return 0
    m = _LEADING_INT_RE.match(value)
    return int(m.group(1)) if m else 0

def _s(row: Mapping[str, Optional[str]], col: str) -> str:
    return row.get(col) or ""

def book_from_row(row: Mapping[str, Optional[str]]) -> Book:
    return Book(
        book_id=to_int(row.get("book_id")),
        book_name=_s(row, "book_name"),
        hebrew_name=_s(row, "hebrew_name"),
        hebrew_transliteration=_s(row, "hebrew_transliteration"),
        hebrew_meaning=_s(row, "hebrew_meaning"),
        greek_name=_s(row, "greek_name"),
        greek_transliteration=_s(row, "greek_transliteration"),
        greek_meaning=_s(row, "greek_meaning"),
        chapter_count=to_int(row.get("chapter_count")),
        verse_count=to_int(row.get("verse_count")),
        short_name=_s(row, "short_name"),
        usx_code=_s(row, "usx_code"),
    )

def verse_from_row(row: Mapping[str, Optional[str]]) -> Verse:
    texts = {attr: _s(row, col) for attr, col in VERSE_TEXT_COLUMNS.items()}
    return Verse(
        id=to_int(row.get("id")),
        book_id=to_int(row.get("book_id")),
        book_name=_s(row, "book_name"),
        chapter=to_int(row.get("chapter")),
        verse=to_int(row.get("verse")),
        **texts,
    )

def strongs_from_fields(fields: Sequence[str]) -> Optional[StrongsDefinition]:
    """
    Positional Strong's record -> definition. Short or keyless records
    return None and are dropped by the caller.
    """
    if len(fields) < STRONGS_FIELD_COUNT or not fields[0]:
        return None
    return StrongsDefinition(
        strongs_number=f"H{fields[0]}",
        word=fields[1],
        gloss=fields[2],
        language=fields[3] or "H",
        part_of_speech=fields[4],
        gender=fields[5],
        occurrences=to_int(fields[6]),
        first_occurrence=fields[7],
        root_word=fields[8],
    )

def load_books(path: Path) -> List[Book]:
    return [book_from_row(r) for r in read_csv_rows(path)]

def load_verses(path: Path) -> List[Verse]:
    return [verse_from_row(r) for r in read_csv_rows(path)]

def load_strongs(path: Path) -> List[StrongsDefinition]:
    text = path.read_text(encoding="utf-8")
    out: List[StrongsDefinition] = []
    for fields in iter_strongs_records(text):
        d = strongs_from_fields(fields)
        if d is not None:
            out.append(d)
    return out
