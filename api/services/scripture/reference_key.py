# api/services/scripture/reference_key.py
"""
Compact verse reference keys.

Favorites and highlights are stored by the caller as strings of the form
``translation:book:chapter:verse``, e.g. ``KJV:Genesis:1:1``.
"""

from .models import VerseKey


class ReferenceKeyError(ValueError):
    """Raised when a reference key cannot be decomposed."""
    pass


def parse_verse_key(ref: str) -> VerseKey:
    """
    Split a reference key into its parts.

    Args:
        ref: Key like "KJV:1 John:3:16"

    Returns:
        VerseKey

    Raises:
        ReferenceKeyError: If the key does not have exactly four fields,
            the book is blank, or chapter/verse are not positive integers
    """
    if not isinstance(ref, str):
        raise ReferenceKeyError(f"Reference key is not a string: {ref!r}")

    parts = ref.split(":")
    if len(parts) != 4:
        raise ReferenceKeyError(f"Expected 4 fields in reference key: {ref!r}")

    translation, book, chapter_str, verse_str = (p.strip() for p in parts)
    if not book:
        raise ReferenceKeyError(f"Missing book in reference key: {ref!r}")

    try:
        chapter = int(chapter_str)
        verse = int(verse_str)
    except ValueError:
        raise ReferenceKeyError(f"Non-integer chapter or verse in reference key: {ref!r}")

    if chapter < 1 or verse < 1:
        raise ReferenceKeyError(f"Chapter and verse must be positive: {ref!r}")

    return VerseKey(translation=translation, book=book, chapter=chapter, verse=verse)


def format_verse_key(translation: str, book: str, chapter: int, verse: int) -> str:
    """Build a reference key, e.g. ("KJV", "Genesis", 1, 1) -> "KJV:Genesis:1:1"."""
    return str(VerseKey(translation, book, chapter, verse))


def is_valid_verse_key(ref: str) -> bool:
    try:
        parse_verse_key(ref)
    except ReferenceKeyError:
        return False
    return True
