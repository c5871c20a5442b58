from __future__ import annotations
import asyncio
import logging
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .loader import load_books, load_strongs, load_verses
from .models import Book, StrongsDefinition, Verse, chapter_key, verse_key

logger = logging.getLogger(__name__)

STRONGS_PREFIXES = ("H", "G")

class BibleStore:
    """
    In-memory books / verses / Strong's store.

    Populated once by :meth:`load` and read-only afterwards. Verses live in a
    single ordered list; the key, book and chapter indexes hold positions into
    that list and are only ever built together in :meth:`_index_verses`.
    """

    def __init__(self, books_path: Path, verses_path: Path, strongs_path: Path):
        self.books_path = Path(books_path)
        self.verses_path = Path(verses_path)
        self.strongs_path = Path(strongs_path)

        self._books: Dict[int, Book] = {}
        self._verses: List[Verse] = []
        self._by_key: Dict[str, int] = {}
        self._by_book: Dict[int, List[int]] = {}
        self._by_chapter: Dict[str, List[int]] = {}
        self._strongs: Dict[str, StrongsDefinition] = {}
        self.duplicate_verses = 0
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        if self._loaded:
            return

        logger.info("Loading Bible data...")
        started = time.perf_counter()

        books, verses, strongs = await asyncio.gather(
            asyncio.to_thread(load_books, self.books_path),
            asyncio.to_thread(load_verses, self.verses_path),
            asyncio.to_thread(load_strongs, self.strongs_path),
        )

        for b in books:
            self._books[b.book_id] = b
        self._index_verses(verses)
        for d in strongs:
            self._strongs[d.strongs_number] = d

        self._loaded = True
        elapsed = (time.perf_counter() - started) * 1000
        logger.info("Data loaded in %.0fms", elapsed)
        logger.info(
            "  %d books, %d verses, %d Strong's definitions",
            len(self._books), len(self._verses), len(self._strongs),
        )

    def load_sync(self) -> None:
        asyncio.run(self.load())

    def _index_verses(self, verses: List[Verse]) -> None:
        for v in verses:
            key = v.key
            pos = self._by_key.get(key)
            if pos is not None:
                # later row wins, keeping the earlier row's position
                logger.warning("Duplicate verse %s (id %d replaces id %d)", key, v.id, self._verses[pos].id)
                self._verses[pos] = v
                self.duplicate_verses += 1
                continue

            pos = len(self._verses)
            self._verses.append(v)
            self._by_key[key] = pos
            self._by_book.setdefault(v.book_id, []).append(pos)
            self._by_chapter.setdefault(v.chapter_key, []).append(pos)

    def counts(self) -> Dict[str, int]:
        return {
            "books": len(self._books),
            "verses": len(self._verses),
            "strongs": len(self._strongs),
        }

    # --- books ---

    def get_books(self) -> List[Book]:
        return list(self._books.values())

    def get_book(self, book_id: int) -> Optional[Book]:
        return self._books.get(book_id)

    def get_book_by_name(self, name: str) -> Optional[Book]:
        lowered = name.lower()
        for b in self._books.values():
            if b.matches_name(lowered):
                return b
        return None

    def resolve_book(self, ident: Union[int, str]) -> Optional[Book]:
        """Book by numeric id (int or digit string) or by name / short name / USX code."""
        if isinstance(ident, int):
            return self.get_book(ident)
        s = ident.strip()
        if s.isdecimal():
            return self.get_book(int(s))
        return self.get_book_by_name(s)

    # --- verses ---

    def get_verse(self, book_id: int, chapter: int, verse: int) -> Optional[Verse]:
        pos = self._by_key.get(verse_key(book_id, chapter, verse))
        return None if pos is None else self._verses[pos]

    def get_chapter(self, book_id: int, chapter: int) -> List[Verse]:
        return [self._verses[p] for p in self._by_chapter.get(chapter_key(book_id, chapter), [])]

    def get_book_verses(self, book_id: int) -> List[Verse]:
        return [self._verses[p] for p in self._by_book.get(book_id, [])]

    def iter_verses(self) -> Iterator[Verse]:
        return iter(self._verses)

    # --- Strong's ---

    @staticmethod
    def normalize_strongs(number: str) -> str:
        n = number.strip().upper()
        if not n.startswith(STRONGS_PREFIXES):
            n = "H" + n
        return n

    def get_strongs(self, number: str) -> Optional[StrongsDefinition]:
        return self._strongs.get(self.normalize_strongs(number))

    def get_all_strongs(self) -> List[StrongsDefinition]:
        return list(self._strongs.values())

    def iter_strongs(self) -> Iterator[StrongsDefinition]:
        return iter(self._strongs.values())
