# api/services/scripture/catalog.py
"""
Book catalog: the ordered list of books with their testament.

Search scope is resolved against a catalog. Callers may pass their own;
DEFAULT_CATALOG is the 66-book Protestant canon in canonical order.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .models import Book, Testament

logger = logging.getLogger(__name__)


OLD_TESTAMENT_BOOKS = [
    # Torah/Pentateuch
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    # Historical Books
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel", "1 Kings", "2 Kings",
    "1 Chronicles", "2 Chronicles", "Ezra", "Nehemiah", "Esther",
    # Wisdom/Poetry
    "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Solomon",
    # Major Prophets
    "Isaiah", "Jeremiah", "Lamentations", "Ezekiel", "Daniel",
    # Minor Prophets
    "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah", "Nahum",
    "Habakkuk", "Zephaniah", "Haggai", "Zechariah", "Malachi",
]

NEW_TESTAMENT_BOOKS = [
    # Gospels and Acts
    "Matthew", "Mark", "Luke", "John", "Acts",
    # Pauline Epistles
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians",
    "1 Timothy", "2 Timothy", "Titus", "Philemon",
    # General Epistles
    "Hebrews", "James", "1 Peter", "2 Peter", "1 John", "2 John", "3 John",
    "Jude",
    # Apocalyptic
    "Revelation",
]

DEFAULT_CATALOG: list[Book] = (
    [Book(name, Testament.OLD) for name in OLD_TESTAMENT_BOOKS]
    + [Book(name, Testament.NEW) for name in NEW_TESTAMENT_BOOKS]
)


def find_book(catalog: list[Book], name: str) -> Optional[Book]:
    """Return the catalog entry with exactly this name, or None."""
    for book in catalog:
        if book.name == name:
            return book
    return None


def books_in_testament(catalog: list[Book], testament: Testament) -> list[Book]:
    return [b for b in catalog if b.testament == testament]


def load_catalog(path: Path) -> list[Book]:
    """
    Load a catalog from a JSON file.

    Expected shape: [{"name": "Genesis", "testament": "OLD"}, ...]

    Entries with a missing name or unknown testament are skipped with a
    warning. An unreadable file yields the default catalog.
    """
    try:
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to read catalog {path}: {e}; using default catalog")
        return list(DEFAULT_CATALOG)

    if not isinstance(entries, list):
        logger.warning(f"Catalog {path} is not a list; using default catalog")
        return list(DEFAULT_CATALOG)

    catalog = []
    for entry in entries:
        try:
            name = entry["name"].strip()
            testament = Testament(str(entry["testament"]).upper())
        except (KeyError, TypeError, AttributeError, ValueError):
            logger.warning(f"Skipping malformed catalog entry: {entry!r}")
            continue
        if name:
            catalog.append(Book(name, testament))

    return catalog
