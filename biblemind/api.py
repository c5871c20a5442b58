from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .bootstrap_data import ensure_data
from .config import Settings
from .loader import to_int
from .models import LANGUAGES, Book
from .search import DEFAULT_VERSE_LIMIT, MIN_QUERY_LENGTH, search_strongs, search_verses
from .store import BibleStore

logger = logging.getLogger(__name__)

API_NAME = "Bible Mind API"
API_VERSION = "1.0.0"
MAX_VERSE_LIMIT = 100
MAX_BULK_NUMBERS = 100

_STARTED = time.time()

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class BookOut(CamelModel):
    book_id: int
    book_name: str
    hebrew_name: str
    hebrew_transliteration: str
    hebrew_meaning: str
    greek_name: str
    greek_transliteration: str
    greek_meaning: str
    chapter_count: int
    verse_count: int
    short_name: str
    usx_code: str
    testament: str

class VerseOut(CamelModel):
    id: int
    book_id: int
    book_name: str
    chapter: int
    verse: int
    web_text: str
    kjv_text: str
    hebrew_text: str
    jps_text: str
    greek_text: str
    brenton_text: str
    samaritan_text: str
    samaritan_english: str
    onkelos_aramaic: str
    onkelos_english: str

class VerseRefOut(VerseOut):
    reference: str

class VerseDetailOut(VerseRefOut):
    testament: Optional[str] = None

class StrongsOut(CamelModel):
    strongs_number: str
    word: str
    gloss: str
    language: str
    part_of_speech: str
    gender: str
    occurrences: int
    first_occurrence: str
    root_word: str

class BulkRequest(BaseModel):
    numbers: Optional[List[str]] = None

def _dump(model: type[CamelModel], obj: Any, **extra: Any) -> Dict[str, Any]:
    return model.model_validate(obj).model_dump(by_alias=True) | extra

def ok(data: Any, **meta: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"success": True, "data": data}
    meta = {k: v for k, v in meta.items() if v is not None}
    if meta:
        out["meta"] = meta
    return out

def error_body(message: str, code: int) -> Dict[str, Any]:
    return {"success": False, "error": message, "code": code}

def get_store(request: Request) -> BibleStore:
    return request.app.state.store

def _require_book(store: BibleStore, ident: str) -> Book:
    book = store.resolve_book(ident)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book

def _require_query(q: Optional[str]) -> str:
    if not q or len(q) < MIN_QUERY_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Search query must be at least {MIN_QUERY_LENGTH} characters",
        )
    return q

def create_app(store: Optional[BibleStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # runs on startup; a failed books/verses load aborts it
        if app.state.store is None:
            s = settings or Settings.from_env()
            ensure_data(s)
            app.state.store = BibleStore(s.books_path, s.verses_path, s.strongs_path)
        await app.state.store.load()
        yield

    app = FastAPI(title=API_NAME, version=API_VERSION, lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == 404 and message == "Not Found":
            message = "Endpoint not found"
        return JSONResponse(error_body(str(message), exc.status_code), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(_request: Request, exc: RequestValidationError):
        errs = exc.errors()
        first = errs[0] if errs else {}
        where = ".".join(str(p) for p in first.get("loc", ()) if p not in ("path", "query", "body"))
        message = f"Invalid {where}: {first.get('msg', 'bad request')}" if where else "Invalid request"
        return JSONResponse(error_body(message, 400), status_code=400)

    @app.exception_handler(Exception)
    async def internal_error(_request: Request, exc: Exception):
        logger.error("Error: %s", exc, exc_info=exc)
        return JSONResponse(error_body("Internal server error", 500), status_code=500)

    @app.get("/health")
    def health(store: BibleStore = Depends(get_store)):
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.time() - _STARTED, 3),
            "loaded": store.counts(),
        }

    @app.get("/api")
    def api_info():
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "description": "Bible API with Hebrew & Greek meanings",
            "endpoints": {
                "books": "/api/books",
                "verses": "/api/verses/:book/:chapter/:verse",
                "strongs": "/api/strongs/:number",
                "search": "/api/search?q=query",
                "languages": "/api/languages",
            },
        }

    # --- books ---

    @app.get("/api/books")
    def api_books(store: BibleStore = Depends(get_store)):
        books = store.get_books()
        return ok([_dump(BookOut, b) for b in books], total=len(books))

    @app.get("/api/books/{book}")
    def api_book(book: str, store: BibleStore = Depends(get_store)):
        return ok(_dump(BookOut, _require_book(store, book)))

    @app.get("/api/books/{book}/chapters")
    def api_book_chapters(book: str, store: BibleStore = Depends(get_store)):
        b = _require_book(store, book)
        return ok({
            "book": b.book_name,
            "chapters": list(range(1, b.chapter_count + 1)),
            "chapterCount": b.chapter_count,
        })

    # --- verses ---

    @app.get("/api/verses/{book}/{chapter}")
    def api_chapter(book: str, chapter: str, store: BibleStore = Depends(get_store)):
        b = _require_book(store, book)
        # leading integer, as parseInt reads it ("1abc" -> 1)
        chapter = to_int(chapter)
        if chapter < 1 or chapter > b.chapter_count:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid chapter. {b.book_name} has {b.chapter_count} chapters.",
            )
        verses = store.get_chapter(b.book_id, chapter)
        return ok(
            {
                "book": b.book_name,
                "bookId": b.book_id,
                "chapter": chapter,
                "verses": [_dump(VerseOut, v) for v in verses],
            },
            total=len(verses),
        )

    @app.get("/api/verses/{book}/{chapter}/{verse}")
    def api_verse(book: str, chapter: str, verse: str, store: BibleStore = Depends(get_store)):
        b = _require_book(store, book)
        chapter, verse = to_int(chapter), to_int(verse)
        v = store.get_verse(b.book_id, chapter, verse)
        if v is None:
            raise HTTPException(status_code=404, detail="Verse not found")
        return ok(_dump(VerseDetailOut, v, reference=f"{b.book_name} {chapter}:{verse}", testament=b.testament))

    # --- Strong's (fixed paths before /{number}) ---

    @app.get("/api/strongs/search")
    def api_strongs_search(q: Optional[str] = Query(None), store: BibleStore = Depends(get_store)):
        q = _require_query(q)
        hits = search_strongs(store, q)
        return ok([_dump(StrongsOut, d) for d in hits], total=len(hits), query=q)

    @app.post("/api/strongs/bulk")
    def api_strongs_bulk(payload: Optional[BulkRequest] = None, store: BibleStore = Depends(get_store)):
        if payload is None or payload.numbers is None:
            raise HTTPException(status_code=400, detail='Request body must contain "numbers" array')

        found: Dict[str, Any] = {}
        not_found: List[str] = []
        for num in payload.numbers[:MAX_BULK_NUMBERS]:
            d = store.get_strongs(num)
            if d is None:
                not_found.append(num)
            else:
                found[d.strongs_number] = _dump(StrongsOut, d)

        return ok(found, found=len(found), notFound=not_found or None)

    @app.get("/api/strongs/all")
    def api_strongs_all(store: BibleStore = Depends(get_store)):
        defs = store.get_all_strongs()
        return ok([_dump(StrongsOut, d) for d in defs], total=len(defs))

    @app.get("/api/strongs/{number}")
    def api_strongs(number: str, store: BibleStore = Depends(get_store)):
        d = store.get_strongs(number)
        if d is None:
            raise HTTPException(status_code=404, detail=f"Strong's number {number} not found")
        return ok(_dump(StrongsOut, d))

    # --- search ---

    @app.get("/api/search")
    def api_search(
        q: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        book: Optional[str] = Query(None),
        store: BibleStore = Depends(get_store),
    ):
        q = _require_query(q)
        n = to_int(limit)
        limit = min(n if n > 0 else DEFAULT_VERSE_LIMIT, MAX_VERSE_LIMIT)

        # unknown book names are ignored rather than rejected
        b = store.get_book_by_name(book) if book else None
        hits = search_verses(store, q, limit=limit, book_id=b.book_id if b else None)
        data = [_dump(VerseRefOut, v, reference=v.reference) for v in hits]
        return ok(data, total=len(data), query=q, limit=limit)

    @app.get("/api/search/strongs")
    def api_search_strongs(q: Optional[str] = Query(None), store: BibleStore = Depends(get_store)):
        return api_strongs_search(q=q, store=store)

    # --- languages ---

    @app.get("/api/languages")
    def api_languages():
        return ok([{"code": code, "name": name} for code, name, _attr in LANGUAGES], total=len(LANGUAGES))

    @app.get("/api/languages/verse/{book}/{chapter}/{verse}")
    def api_verse_languages(book: str, chapter: str, verse: str, store: BibleStore = Depends(get_store)):
        b = _require_book(store, book)
        chapter, verse = to_int(chapter), to_int(verse)
        v = store.get_verse(b.book_id, chapter, verse)
        if v is None:
            raise HTTPException(status_code=404, detail="Verse not found")
        return ok({
            "reference": f"{b.book_name} {chapter}:{verse}",
            "bookId": v.book_id,
            "chapter": v.chapter,
            "verse": v.verse,
            "translations": v.translations(),
        })

    return app

app = create_app()
