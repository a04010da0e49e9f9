# api/services/scripture/models.py
"""
Data types shared by the scripture lookup services.

Everything here is plain data: the loader, search and resolver modules
build these, and the API layer serializes them with ``to_dict()``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Testament(str, Enum):
    """Two-valued partition of the book catalog."""
    OLD = "OLD"
    NEW = "NEW"

    @classmethod
    def parse(cls, value: str) -> Optional["Testament"]:
        """
        Parse a testament filter value.

        Returns None for "any" (or blank), a Testament for OLD/NEW.

        Raises:
            ValueError: For anything else
        """
        value = (value or "").strip().upper()
        if value in ("", "ANY"):
            return None
        return cls(value)


@dataclass(frozen=True)
class Book:
    """Catalog entry for one book."""
    name: str
    testament: Testament

    def to_dict(self) -> dict:
        return {"name": self.name, "testament": self.testament.value}


@dataclass(frozen=True)
class BookData:
    """
    Loaded chapter/verse text for one book.

    Attributes:
        chapters: chapter number -> (verse number -> text), both levels
                  in ascending numeric order
    """
    chapters: dict[int, dict[int, str]]

    @property
    def is_empty(self) -> bool:
        return not self.chapters

    def verse_text(self, chapter: int, verse: int) -> Optional[str]:
        """Return the text of one verse, or None if either lookup misses."""
        verses = self.chapters.get(chapter)
        if verses is None:
            return None
        return verses.get(verse)


@dataclass
class Verse:
    book_name: str
    chapter: int
    verse: int
    text: str

    @property
    def reference(self) -> str:
        return f"{self.book_name} {self.chapter}:{self.verse}"

    def to_dict(self) -> dict:
        return {
            "book_name": self.book_name,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }


@dataclass
class ChapterData:
    """One chapter ready for display."""
    reference: str
    verses: list[Verse] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "reference": self.reference,
            "verses": [v.to_dict() for v in self.verses],
        }


@dataclass(frozen=True)
class MatchSpan:
    """Half-open character range [start, end) of a query match."""
    start: int
    end: int

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass
class SearchParams:
    """
    Search request.

    Attributes:
        query: Literal text to look for (case-insensitive)
        testament: "OLD", "NEW" or "any"
        book: Book name or "any"
        chapter: Chapter number as text; blank means every chapter
        limit: Optional cap on the number of results
    """
    query: str
    testament: str = "any"
    book: str = "any"
    chapter: str = ""
    limit: Optional[int] = None


@dataclass
class SearchResult:
    """
    A verse matching a search query.

    ``text`` is the plain verse text; ``spans`` marks every occurrence of
    the query so the presentation layer decides how to emphasize it.
    """
    reference: str
    book: Book
    chapter: int
    verse: int
    text: str
    spans: list[MatchSpan] = field(default_factory=list)

    def highlighted(self, open_tag: str = "<strong>", close_tag: str = "</strong>") -> str:
        """Return the text with each match span wrapped in the given markers."""
        parts = []
        pos = 0
        for span in self.spans:
            parts.append(self.text[pos:span.start])
            parts.append(open_tag)
            parts.append(self.text[span.start:span.end])
            parts.append(close_tag)
            pos = span.end
        parts.append(self.text[pos:])
        return "".join(parts)

    def to_dict(self) -> dict:
        return {
            "reference": self.reference,
            "book": self.book.to_dict(),
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
            "spans": [s.to_dict() for s in self.spans],
        }


@dataclass(frozen=True)
class VerseKey:
    """
    Decomposed compact reference key ``translation:book:chapter:verse``.

    The translation field is carried but not used for lookup yet.
    """
    translation: str
    book: str
    chapter: int
    verse: int

    def __str__(self) -> str:
        return f"{self.translation}:{self.book}:{self.chapter}:{self.verse}"


@dataclass
class ResolvedFavorite:
    ref: str
    book_name: str
    chapter: int
    verse: int
    reference: str
    text: str

    def to_dict(self) -> dict:
        return {
            "ref": self.ref,
            "book_name": self.book_name,
            "chapter": self.chapter,
            "verse": self.verse,
            "reference": self.reference,
            "text": self.text,
        }


@dataclass
class ResolvedHighlight:
    """
    A highlight resolved to its verse text.

    ``extra`` holds every caller field from the input record except ``ref``
    (e.g. ``color``) and is spread back out by ``to_dict()``.
    """
    ref: str
    book_name: str
    chapter: int
    verse: int
    reference: str
    text: str
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def color(self) -> Optional[str]:
        return self.extra.get("color")

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({
            "ref": self.ref,
            "book_name": self.book_name,
            "chapter": self.chapter,
            "verse": self.verse,
            "reference": self.reference,
            "text": self.text,
        })
        return data
