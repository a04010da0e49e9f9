# api/services/scripture/scripture_service.py
"""
Unified scripture service.

Wires a book source, cache and catalog together and exposes chapter
lookup, search and favorite/highlight resolution behind one object.
No method raises: failures come back as None or empty lists and are
reported through logging.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from .book_cache import BookCache
from .book_loader import BookLoader
from .book_source import BookSource, FileBookSource, HttpBookSource
from .catalog import DEFAULT_CATALOG, books_in_testament, load_catalog
from .chapter import get_chapter
from .models import (
    Book,
    BookData,
    ChapterData,
    ResolvedFavorite,
    ResolvedHighlight,
    SearchParams,
    SearchResult,
    Testament,
)
from .resolver import resolve_favorites, resolve_highlights
from .search import search
from .storage import ScriptureStorage

logger = logging.getLogger(__name__)


def build_source(storage: ScriptureStorage) -> BookSource:
    """Create the book source selected by configuration."""
    if storage.source_kind == "http":
        return HttpBookSource(
            storage.base_url,
            timeout=storage.request_timeout,
            max_retries=storage.max_retries,
        )
    if storage.source_kind != "file":
        logger.warning(f"Unknown SCRIPTURE_SOURCE {storage.source_kind!r}; using file source")
    return FileBookSource(storage.data_path)


class ScriptureService:
    """
    Single entry point for scripture lookups.

    Usage:
        service = ScriptureService()

        chapter = service.get_chapter("John", 3)
        for verse in chapter.verses:
            print(verse.verse, verse.text)

        results = service.search(SearchParams(query="light", testament="NEW"))

        favorites = service.resolve_favorites(["KJV:John:3:16"])
        highlights = service.resolve_highlights(
            [{"ref": "KJV:Genesis:1:1", "color": "yellow"}]
        )
    """

    def __init__(
        self,
        source: Optional[BookSource] = None,
        cache: Optional[BookCache] = None,
        catalog: Optional[list[Book]] = None,
        storage: Optional[ScriptureStorage] = None,
    ):
        self.storage = storage or ScriptureStorage()
        self.source = source or build_source(self.storage)
        self.loader = BookLoader(self.source, cache if cache is not None else BookCache())

        if catalog is not None:
            self.catalog = list(catalog)
        elif self.storage.catalog_path:
            self.catalog = load_catalog(self.storage.catalog_path)
        else:
            self.catalog = list(DEFAULT_CATALOG)

    @property
    def cache(self) -> BookCache:
        return self.loader.cache

    def load_book(self, name: str) -> Optional[BookData]:
        return self.loader.load_book(name)

    def get_chapter(self, book_name: str, chapter: int) -> Optional[ChapterData]:
        return get_chapter(self.loader, book_name, chapter)

    def search(self, params: SearchParams) -> list[SearchResult]:
        return search(self.loader, params, self.catalog)

    def resolve_favorites(self, refs: Sequence[str]) -> list[ResolvedFavorite]:
        return resolve_favorites(self.loader, refs)

    def resolve_highlights(self, highlights: Sequence[Mapping[str, Any]]) -> list[ResolvedHighlight]:
        return resolve_highlights(self.loader, highlights)

    def list_books(self, testament: Optional[Testament] = None) -> list[Book]:
        """List catalog books, optionally restricted to one testament."""
        if testament is None:
            return list(self.catalog)
        return books_in_testament(self.catalog, testament)

    def cache_stats(self) -> dict:
        stats = self.cache.get_stats()
        stats["retrievals"] = self.loader.retrievals
        stats["source"] = self.source.describe()
        return stats

    def clear_cache(self) -> dict:
        return {"cleared": self.cache.clear()}
