# api/services/scripture/search.py
"""
Full-text verse search.

Linear scan over the books in scope: no index, no ranking. Results come
back in book, chapter, verse order with the positions of every match so
the caller can render emphasis however it likes.
"""

import logging
import re
from typing import Optional

from .book_loader import BookLoader
from .catalog import books_in_testament, find_book
from .models import Book, MatchSpan, SearchParams, SearchResult, Testament

logger = logging.getLogger(__name__)


def compile_query(query: str) -> re.Pattern:
    """Compile a literal, case-insensitive pattern for the query."""
    return re.compile(re.escape(query), re.IGNORECASE)


def find_match_spans(pattern: re.Pattern, text: str) -> list[MatchSpan]:
    """Return every non-overlapping match of pattern in text."""
    return [MatchSpan(m.start(), m.end()) for m in pattern.finditer(text)]


def render_highlights(result: SearchResult, open_tag: str = "<strong>", close_tag: str = "</strong>") -> str:
    """Wrap each match in a search result with the given markers."""
    return result.highlighted(open_tag, close_tag)


def resolve_scope(params: SearchParams, catalog: list[Book]) -> list[Book]:
    """
    Work out which books a search covers.

    A specific book wins over a testament filter; with neither, the whole
    catalog is searched. Catalog order is kept.

    Raises:
        ValueError: If the testament filter is not OLD, NEW or any
    """
    book_name = (params.book or "any").strip()
    if book_name.lower() != "any":
        book = find_book(catalog, book_name)
        return [book] if book else []

    testament = Testament.parse(params.testament)
    if testament is not None:
        return books_in_testament(catalog, testament)

    return list(catalog)


def parse_chapter_filter(chapter: Optional[str]) -> tuple[bool, Optional[int]]:
    """
    Parse the optional chapter filter.

    Returns:
        (valid, chapter) where chapter is None when no filter was given
    """
    value = (chapter or "").strip()
    if not value:
        return True, None
    try:
        number = int(value)
    except ValueError:
        return False, None
    if number < 1:
        return False, None
    return True, number


def search(loader: BookLoader, params: SearchParams, catalog: list[Book]) -> list[SearchResult]:
    """
    Search verse text for a literal query.

    A verse matches when the lowercased query occurs in its lowercased
    text. Spans come from a case-insensitive regex and may be empty for
    the few characters whose lowercase form has a different length.

    Args:
        loader: Book loader to read through
        params: Query and scope filters
        catalog: Books available to search

    Returns:
        Matching verses in book, chapter, verse order. Empty for a blank
        query or an invalid filter.
    """
    results: list[SearchResult] = []
    query = params.query or ""
    if not query.strip():
        return results
    if params.limit is not None and params.limit <= 0:
        return results

    valid, chapter_filter = parse_chapter_filter(params.chapter)
    if not valid:
        logger.warning(f"Invalid chapter filter {params.chapter!r}; returning no results")
        return results

    try:
        books = resolve_scope(params, catalog)
    except ValueError:
        logger.warning(f"Invalid testament filter {params.testament!r}; returning no results")
        return results

    needle = query.lower()
    pattern = compile_query(query)

    for book in books:
        try:
            data = loader.load_book(book.name)
        except Exception as e:
            logger.warning(f"Skipping {book.name} in search: {e}")
            continue
        if data is None:
            continue

        if chapter_filter is not None:
            chapters = [chapter_filter]
        else:
            chapters = list(data.chapters)

        for chapter in chapters:
            verses = data.chapters.get(chapter)
            if not verses:
                continue

            for verse, text in verses.items():
                if needle not in text.lower():
                    continue
                spans = find_match_spans(pattern, text)
                results.append(SearchResult(
                    reference=f"{book.name} {chapter}:{verse}",
                    book=book,
                    chapter=chapter,
                    verse=verse,
                    text=text,
                    spans=spans,
                ))
                if params.limit is not None and len(results) >= params.limit:
                    return results

    return results
