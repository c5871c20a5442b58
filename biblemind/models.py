from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

Testament = Literal["old", "new"]

# Last Old Testament book id in canonical (Protestant) order: Malachi.
LAST_OLD_TESTAMENT_ID = 39

@dataclass(frozen=True)
class Book:
    book_id: int
    book_name: str
    hebrew_name: str = ""
    hebrew_transliteration: str = ""
    hebrew_meaning: str = ""
    greek_name: str = ""
    greek_transliteration: str = ""
    greek_meaning: str = ""
    chapter_count: int = 0
    verse_count: int = 0
    short_name: str = ""
    usx_code: str = ""

    @property
    def testament(self) -> Testament:
        return "old" if self.book_id <= LAST_OLD_TESTAMENT_ID else "new"

    def matches_name(self, lowered: str) -> bool:
        return lowered in (
            self.book_name.lower(),
            self.short_name.lower(),
            self.usx_code.lower(),
        )

@dataclass(frozen=True)
class Verse:
    id: int
    book_id: int
    book_name: str
    chapter: int
    verse: int
    kjv_text: str = ""
    web_text: str = ""
    hebrew_text: str = ""
    jps_text: str = ""
    greek_text: str = ""
    brenton_text: str = ""
    samaritan_text: str = ""
    samaritan_english: str = ""
    onkelos_aramaic: str = ""
    onkelos_english: str = ""

    @property
    def key(self) -> str:
        return verse_key(self.book_id, self.chapter, self.verse)

    @property
    def chapter_key(self) -> str:
        return chapter_key(self.book_id, self.chapter)

    @property
    def reference(self) -> str:
        return f"{self.book_name} {self.chapter}:{self.verse}"

    def translations(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for code, _name, attr in LANGUAGES:
            text = getattr(self, attr)
            if text and text.strip():
                out[code] = text
        return out

@dataclass(frozen=True)
class StrongsDefinition:
    strongs_number: str
    word: str
    gloss: str
    language: str = "H"  # H (Hebrew), A (Aramaic), G (Greek)
    part_of_speech: str = ""
    gender: str = ""
    occurrences: int = 0
    first_occurrence: str = ""
    root_word: str = ""

def verse_key(book_id: int, chapter: int, verse: int) -> str:
    return f"{book_id}-{chapter}-{verse}"

def chapter_key(book_id: int, chapter: int) -> str:
    return f"{book_id}-{chapter}"

# (code, display name, Verse attribute)
LANGUAGES: List[Tuple[str, str, str]] = [
    ("kjv", "King James Version (English)", "kjv_text"),
    ("web", "World English Bible", "web_text"),
    ("hebrew", "Leningrad Codex (Hebrew)", "hebrew_text"),
    ("jps", "Jewish Publication Society", "jps_text"),
    ("greek", "Codex Alexandrinus (Greek)", "greek_text"),
    ("brenton", "Brenton Septuagint", "brenton_text"),
    ("samaritan", "Samaritan Pentateuch (Hebrew)", "samaritan_text"),
    ("samaritan_en", "Samaritan Pentateuch (English)", "samaritan_english"),
    ("aramaic", "Onkelos Targum (Aramaic)", "onkelos_aramaic"),
    ("aramaic_en", "Onkelos Targum (English)", "onkelos_english"),
]
