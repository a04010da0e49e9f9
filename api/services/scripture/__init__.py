# api/services/scripture/__init__.py
"""
Scripture lookup services.

This package provides:
- ScriptureService: Unified interface for chapter, search and resolution
- BookLoader / BookCache: Memoized book retrieval
- FileBookSource / HttpBookSource: Where book JSON files come from
- get_chapter: One chapter as ordered verses
- search: Literal full-text search over a scope of books
- resolve_favorites / resolve_highlights: Stored reference keys -> text
- parse_verse_key: Decompose "translation:book:chapter:verse" keys
"""

from .models import (
    Testament,
    Book,
    BookData,
    Verse,
    ChapterData,
    MatchSpan,
    SearchParams,
    SearchResult,
    VerseKey,
    ResolvedFavorite,
    ResolvedHighlight,
)
from .book_source import (
    BookSource,
    FileBookSource,
    HttpBookSource,
    BookSourceError,
    BookNotFoundError,
    BookPayloadError,
    parse_book_payload,
)
from .book_cache import BookCache, get_book_cache
from .book_loader import BookLoader, sanitize_book_name
from .catalog import DEFAULT_CATALOG, find_book, load_catalog
from .chapter import get_chapter
from .search import search, find_match_spans, render_highlights
from .reference_key import (
    ReferenceKeyError,
    parse_verse_key,
    format_verse_key,
    is_valid_verse_key,
)
from .resolver import resolve_references, resolve_favorites, resolve_highlights
from .storage import ScriptureStorage
from .scripture_service import ScriptureService, build_source

__all__ = [
    # Unified Service (primary interface)
    "ScriptureService",
    "build_source",
    "ScriptureStorage",
    # Models
    "Testament",
    "Book",
    "BookData",
    "Verse",
    "ChapterData",
    "MatchSpan",
    "SearchParams",
    "SearchResult",
    "VerseKey",
    "ResolvedFavorite",
    "ResolvedHighlight",
    # Sources
    "BookSource",
    "FileBookSource",
    "HttpBookSource",
    "BookSourceError",
    "BookNotFoundError",
    "BookPayloadError",
    "parse_book_payload",
    # Loading
    "BookCache",
    "get_book_cache",
    "BookLoader",
    "sanitize_book_name",
    # Catalog
    "DEFAULT_CATALOG",
    "find_book",
    "load_catalog",
    # Operations
    "get_chapter",
    "search",
    "find_match_spans",
    "render_highlights",
    "resolve_references",
    "resolve_favorites",
    "resolve_highlights",
    # Reference keys
    "ReferenceKeyError",
    "parse_verse_key",
    "format_verse_key",
    "is_valid_verse_key",
]
