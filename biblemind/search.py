from __future__ import annotations
from itertools import islice
from typing import Iterable, List, Optional

from .models import StrongsDefinition, Verse
from .store import BibleStore

MIN_QUERY_LENGTH = 2
STRONGS_SEARCH_LIMIT = 50
DEFAULT_VERSE_LIMIT = 20

def _strongs_matches(d: StrongsDefinition, q: str) -> bool:
    return q in d.word.lower() or q in d.gloss.lower() or q in d.root_word.lower()

def _verse_matches(v: Verse, q: str) -> bool:
    return q in v.kjv_text.lower() or q in v.web_text.lower()

def search_strongs(store: BibleStore, query: str, limit: int = STRONGS_SEARCH_LIMIT) -> List[StrongsDefinition]:
    """
    Case-insensitive substring match over headword, gloss and root word.
    Results come back in load order, never more than STRONGS_SEARCH_LIMIT.
    """
    q = query.lower()
    limit = max(0, min(limit, STRONGS_SEARCH_LIMIT))
    hits = (d for d in store.iter_strongs() if _strongs_matches(d, q))
    return list(islice(hits, limit))

def search_verses(
    store: BibleStore,
    query: str,
    limit: int = DEFAULT_VERSE_LIMIT,
    book_id: Optional[int] = None,
) -> List[Verse]:
    """
    First `limit` verses (storage order) whose KJV or WEB text contains query,
    case-insensitively. Other translations are not searched.
    """
    q = query.lower()
    pool: Iterable[Verse] = store.iter_verses() if book_id is None else store.get_book_verses(book_id)

    results: List[Verse] = []
    for v in pool:
        if len(results) >= limit:
            break
        if _verse_matches(v, q):
            results.append(v)
    return results
