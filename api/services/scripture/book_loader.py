# api/services/scripture/book_loader.py
"""
Book loader: book name -> BookData, memoized in a BookCache.
"""

import logging
import re
from typing import Optional

from .book_cache import BookCache
from .book_source import BookSource, BookSourceError
from .models import BookData

logger = logging.getLogger(__name__)


def sanitize_book_name(name: str) -> str:
    """
    Turn a book name into the identifier its file is stored under.

    "Song of Solomon" -> "SongofSolomon", "1 John" -> "1John"
    """
    return re.sub(r"\s+", "", name)


class BookLoader:
    """
    Loads books from a source and remembers them.

    Only books with at least one chapter are cached. A failed or empty
    load is retried on the next call.

    Usage:
        loader = BookLoader(FileBookSource(Path("data/json")), BookCache())
        data = loader.load_book("Genesis")
        if data:
            print(data.chapters[1][1])
    """

    def __init__(self, source: BookSource, cache: Optional[BookCache] = None):
        self.source = source
        self.cache = cache if cache is not None else BookCache()
        self.retrievals = 0

    def load_book(self, name: str) -> Optional[BookData]:
        """
        Load a book by name.

        Args:
            name: Book name as it appears in the catalog (e.g. "1 Samuel")

        Returns:
            BookData, or None if the source could not supply it
        """
        cached = self.cache.get(name)
        if cached is not None:
            logger.debug(f"Cache hit for {name}")
            return cached

        book_id = sanitize_book_name(name)
        self.retrievals += 1
        try:
            data = self.source.fetch(book_id)
        except BookSourceError as e:
            logger.warning(f"Failed to load book {name!r} from {self.source.describe()}: {e}")
            return None

        if data.is_empty:
            logger.warning(f"Book {name!r} has no chapters; not caching")
        else:
            self.cache.put(name, data)

        return data
