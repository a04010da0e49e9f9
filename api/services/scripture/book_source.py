# api/services/scripture/book_source.py
"""
Retrieval boundary for per-book JSON files.

A book source turns a sanitized book identifier (e.g. "1Samuel") into
validated BookData. Two implementations:

- FileBookSource: reads <data_path>/<id>.json from local disk
- HttpBookSource: GETs <base_url>/<id>.json

Every failure surfaces as a BookSourceError subclass. Raw JSON never
leaves this module: payloads are validated by parse_book_payload() first.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from urllib.parse import quote

import requests

from utils.http_retry import HttpRetryError, get_with_retry

from .models import BookData

logger = logging.getLogger(__name__)


class BookSourceError(Exception):
    """Base exception for book retrieval errors."""
    pass


class BookNotFoundError(BookSourceError):
    """Raised when the source has no file for the requested book."""
    pass


class BookPayloadError(BookSourceError):
    """Raised when the book file is not valid JSON of the expected shape."""
    pass


def _parse_number(key: Any, what: str) -> int:
    # Plain ASCII digits only: no sign, whitespace or underscores
    if not isinstance(key, str) or not (key.isascii() and key.isdigit()):
        raise BookPayloadError(f"Non-numeric {what} key: {key!r}")
    number = int(key)
    if number < 1:
        raise BookPayloadError(f"Out of range {what} key: {key!r}")
    return number


def parse_book_payload(payload: Any) -> BookData:
    """
    Validate a decoded book payload and convert it to BookData.

    Expected shape:
        {"chapters": {"1": {"1": "In the beginning...", ...}, ...}}

    Chapter and verse keys must be decimal digit strings. They are converted
    to integers and both levels are ordered numerically. Keys that collapse
    to the same number (e.g. "1" and "01") are rejected.

    Raises:
        BookPayloadError: If the payload does not match the shape
    """
    if not isinstance(payload, dict):
        raise BookPayloadError("Book payload is not an object")

    raw_chapters = payload.get("chapters")
    if not isinstance(raw_chapters, dict):
        raise BookPayloadError("Book payload has no 'chapters' object")

    chapters: dict[int, dict[int, str]] = {}
    for chapter_key, raw_verses in raw_chapters.items():
        chapter = _parse_number(chapter_key, "chapter")
        if chapter in chapters:
            raise BookPayloadError(f"Duplicate chapter key: {chapter_key!r}")
        if not isinstance(raw_verses, dict):
            raise BookPayloadError(f"Chapter {chapter_key!r} is not an object")

        verses: dict[int, str] = {}
        for verse_key, text in raw_verses.items():
            verse = _parse_number(verse_key, "verse")
            if verse in verses:
                raise BookPayloadError(
                    f"Duplicate verse key in chapter {chapter_key}: {verse_key!r}"
                )
            if not isinstance(text, str):
                raise BookPayloadError(
                    f"Verse {chapter_key}:{verse_key} text is not a string"
                )
            verses[verse] = text

        chapters[chapter] = dict(sorted(verses.items()))

    return BookData(chapters=dict(sorted(chapters.items())))


class BookSource(ABC):
    """Something that can fetch a book by its sanitized identifier."""

    @abstractmethod
    def fetch(self, book_id: str) -> BookData:
        """
        Retrieve and validate one book.

        Args:
            book_id: Book name with whitespace removed (e.g. "SongofSolomon")

        Raises:
            BookSourceError: On any retrieval or validation failure
        """

    def describe(self) -> str:
        return self.__class__.__name__


class FileBookSource(BookSource):
    """
    Reads book JSON files from a local directory.

    Usage:
        source = FileBookSource(Path("data/json"))
        data = source.fetch("Genesis")
    """

    def __init__(self, data_path: Path):
        self.data_path = Path(data_path)

    def path_for(self, book_id: str) -> Path:
        return self.data_path / f"{book_id}.json"

    def fetch(self, book_id: str) -> BookData:
        path = self.path_for(book_id)
        try:
            resolved = path.resolve()
            inside = resolved.is_relative_to(self.data_path.resolve())
        except (OSError, ValueError) as e:
            raise BookNotFoundError(f"Unusable book id {book_id!r}: {e}")
        # Ids like "../x" must not reach files outside data_path
        if not inside:
            raise BookNotFoundError(f"Book id {book_id!r} is outside {self.data_path}")
        if not resolved.is_file():
            raise BookNotFoundError(f"No book file at {path}")

        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BookPayloadError(f"Invalid JSON in {path}: {e}")
        except OSError as e:
            raise BookSourceError(f"Failed to read {path}: {e}")

        return parse_book_payload(payload)

    def describe(self) -> str:
        return f"file:{self.data_path}"


class HttpBookSource(BookSource):
    """
    Fetches book JSON files over HTTP.

    Transient failures are retried by get_with_retry(); a 404 is reported
    as BookNotFoundError.
    """

    def __init__(self, base_url: str, timeout: int = 15, max_retries: int = 3):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries

    def url_for(self, book_id: str) -> str:
        return f"{self.base_url}/{quote(book_id, safe='')}.json"

    def fetch(self, book_id: str) -> BookData:
        url = self.url_for(book_id)
        logger.debug(f"Fetching {url}")

        try:
            response = get_with_retry(
                url, timeout=self.timeout, max_retries=self.max_retries
            )
        except HttpRetryError as e:
            if e.status_code == 404:
                raise BookNotFoundError(f"Book not found at {url}")
            raise BookSourceError(str(e))
        except requests.RequestException as e:
            raise BookSourceError(f"Network error fetching {url}: {e}")

        try:
            payload = response.json()
        except ValueError as e:
            raise BookPayloadError(f"Invalid JSON from {url}: {e}")

        return parse_book_payload(payload)

    def describe(self) -> str:
        return f"http:{self.base_url}"
