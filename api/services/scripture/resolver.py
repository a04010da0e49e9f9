# api/services/scripture/resolver.py
"""
Resolution of stored verse references back into display text.

Favorites are bare reference keys; highlights are records carrying a
``ref`` key plus caller fields (color, note id, ...). Both go through
resolve_references(), which:

1. parses every key, dropping malformed ones with a warning
2. groups keys by book so each book is loaded at most once
3. looks up chapter and verse, silently dropping misses
4. rebuilds the output in the caller's original order
"""

import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from .book_loader import BookLoader
from .models import ResolvedFavorite, ResolvedHighlight, Verse, VerseKey
from .reference_key import ReferenceKeyError, parse_verse_key

logger = logging.getLogger(__name__)


def _parse_record(record: Any, key_of: Callable[[Any], str]) -> Optional[tuple[str, VerseKey]]:
    try:
        ref = key_of(record)
        return ref, parse_verse_key(ref)
    except (ReferenceKeyError, KeyError, TypeError) as e:
        logger.warning(f"Could not parse reference {record!r}: {e}")
        return None


def resolve_references(
    loader: BookLoader,
    records: Sequence[Any],
    key_of: Callable[[Any], str],
) -> list[tuple[Any, str, Verse]]:
    """
    Resolve a sequence of records to verses, keeping input order.

    Args:
        loader: Book loader to read through
        records: Caller records, each identifying one verse
        key_of: Extracts the reference key from a record

    Returns:
        (record, ref, verse) for every record that resolved, in input
        order. A key that appears twice resolves once and is reported
        for both records.
    """
    if not records:
        return []

    parsed = [_parse_record(record, key_of) for record in records]

    by_book: dict[str, list[tuple[str, VerseKey]]] = {}
    for entry in parsed:
        if entry is None:
            continue
        ref, key = entry
        by_book.setdefault(key.book, []).append((ref, key))

    resolved: dict[str, Verse] = {}
    for book_name, entries in by_book.items():
        try:
            book = loader.load_book(book_name)
        except Exception as e:
            logger.warning(f"Skipping references in {book_name}: {e}")
            continue
        if book is None:
            continue

        for ref, key in entries:
            if ref in resolved:
                continue
            text = book.verse_text(key.chapter, key.verse)
            if not text:
                continue
            resolved[ref] = Verse(
                book_name=book_name,
                chapter=key.chapter,
                verse=key.verse,
                text=text,
            )

    results = []
    for record, entry in zip(records, parsed):
        if entry is None:
            continue
        ref = entry[0]
        verse = resolved.get(ref)
        if verse is not None:
            results.append((record, ref, verse))
    return results


def resolve_favorites(loader: BookLoader, refs: Sequence[str]) -> list[ResolvedFavorite]:
    """
    Resolve favorite reference keys to verse text.

    Args:
        loader: Book loader to read through
        refs: Keys like "KJV:Genesis:1:1", in display order

    Returns:
        Resolved favorites in the same order; unresolvable keys are dropped
    """
    return [
        ResolvedFavorite(
            ref=ref,
            book_name=verse.book_name,
            chapter=verse.chapter,
            verse=verse.verse,
            reference=verse.reference,
            text=verse.text,
        )
        for _, ref, verse in resolve_references(loader, refs, lambda r: r)
    ]


def resolve_highlights(
    loader: BookLoader,
    highlights: Sequence[Mapping[str, Any]],
) -> list[ResolvedHighlight]:
    """
    Resolve highlight records to verse text.

    Each record must carry a "ref" key. Every other field (e.g. "color")
    is copied unchanged onto that record's result.

    Args:
        loader: Book loader to read through
        highlights: Records like {"ref": "KJV:John:3:16", "color": "yellow"}

    Returns:
        Resolved highlights in the same order; unresolvable records are
        dropped
    """
    return [
        ResolvedHighlight(
            ref=ref,
            book_name=verse.book_name,
            chapter=verse.chapter,
            verse=verse.verse,
            reference=verse.reference,
            text=verse.text,
            extra={k: v for k, v in record.items() if k != "ref"},
        )
        for record, ref, verse in resolve_references(loader, highlights, lambda h: h["ref"])
    ]
