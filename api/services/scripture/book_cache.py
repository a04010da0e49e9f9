# api/services/scripture/book_cache.py
"""
In-memory cache of loaded books.

Entries live for the lifetime of the cache object and are never evicted.
The loader decides what is worth caching; this class only stores it.
"""

import logging
from typing import Any, Dict, Optional

from .models import BookData

logger = logging.getLogger(__name__)


class BookCache:
    """Caches loaded books keyed by the book name the caller asked for."""

    def __init__(self):
        self._books: Dict[str, BookData] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, name: str) -> bool:
        return name in self._books

    def __len__(self) -> int:
        return len(self._books)

    def get(self, name: str) -> Optional[BookData]:
        """Get a cached book, counting the hit or miss."""
        data = self._books.get(name)
        if data is None:
            self.misses += 1
        else:
            self.hits += 1
        return data

    def put(self, name: str, data: BookData) -> None:
        """Store a book. A second put for the same name replaces the first."""
        self._books[name] = data
        logger.debug(f"Cached {name} ({len(data.chapters)} chapters)")

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        cleared = len(self._books)
        self._books.clear()
        if cleared:
            logger.info(f"Cleared {cleared} cached books")
        return cleared

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "books": sorted(self._books),
            "total_entries": len(self._books),
            "total_chapters": sum(len(d.chapters) for d in self._books.values()),
            "hits": self.hits,
            "misses": self.misses,
        }


# Singleton helper
_default_cache: Optional[BookCache] = None


def get_book_cache() -> BookCache:
    """Get or create the process-wide book cache."""
    global _default_cache
    if _default_cache is None:
        _default_cache = BookCache()
    return _default_cache
