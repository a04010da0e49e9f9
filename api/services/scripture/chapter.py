# api/services/scripture/chapter.py
"""Single-chapter retrieval."""

import logging
from typing import Optional

from .book_loader import BookLoader
from .models import ChapterData, Verse

logger = logging.getLogger(__name__)


def get_chapter(loader: BookLoader, book_name: str, chapter: int) -> Optional[ChapterData]:
    """
    Get one chapter of a book as an ordered list of verses.

    Args:
        loader: Book loader to read through
        book_name: Book name (e.g. "Genesis")
        chapter: Chapter number

    Returns:
        ChapterData (possibly with no verses), or None if the book or
        chapter is unavailable
    """
    try:
        book = loader.load_book(book_name)
        if book is None or chapter not in book.chapters:
            logger.warning(
                f"No chapter data found for {book_name} {chapter}. "
                "The book file might be missing or lack the chapter."
            )
            return None

        verses = [
            Verse(book_name=book_name, chapter=chapter, verse=number, text=text)
            for number, text in book.chapters[chapter].items()
        ]
        if not verses:
            logger.warning(f"No verses found for {book_name} {chapter}")

        return ChapterData(reference=f"{book_name} {chapter}", verses=verses)

    except Exception as e:
        logger.error(f"Failed to get chapter data for {book_name} {chapter}: {e}")
        return None
