# api/tests/test_chapter.py
"""
Tests for get_chapter.
"""

from scripture_fixtures import make_loader

from services.scripture import BookLoader, BookSource, get_chapter


def test_get_chapter_returns_ordered_verses():
    loader, _ = make_loader()

    chapter = get_chapter(loader, "Genesis", 1)

    assert chapter is not None
    assert chapter.reference == "Genesis 1"
    assert [v.verse for v in chapter.verses] == [1, 2, 3]
    assert all(v.book_name == "Genesis" and v.chapter == 1 for v in chapter.verses)
    assert chapter.verses[2].text == "And God said, Let there be light: and there was light."
    assert chapter.verses[0].reference == "Genesis 1:1"
    print("✓ get_chapter: verses in ascending order")


def test_get_chapter_orders_unsorted_source_numerically():
    loader, _ = make_loader({
        "Psalms": {"chapters": {"119": {"10": "ten", "2": "two", "1": "one"}}}
    })

    chapter = get_chapter(loader, "Psalms", 119)
    assert [v.verse for v in chapter.verses] == [1, 2, 10]
    print("✓ get_chapter: numeric verse order regardless of file order")


def test_get_chapter_missing_chapter_is_none():
    """A chapter absent from the source is None, not an empty chapter."""
    loader, _ = make_loader()

    assert get_chapter(loader, "Genesis", 50) is None
    print("✓ get_chapter: missing chapter returns None")


def test_get_chapter_missing_book_is_none():
    loader, _ = make_loader()

    assert get_chapter(loader, "Exodus", 1) is None
    print("✓ get_chapter: missing book returns None")


def test_get_chapter_empty_chapter_has_no_verses():
    loader, _ = make_loader({"Genesis": {"chapters": {"1": {}}}})

    chapter = get_chapter(loader, "Genesis", 1)
    assert chapter is not None
    assert chapter.verses == []
    assert chapter.to_dict() == {"reference": "Genesis 1", "verses": []}
    print("✓ get_chapter: empty chapter returns empty verse list")


def test_get_chapter_reuses_cached_book():
    loader, source = make_loader()

    get_chapter(loader, "John", 1)
    get_chapter(loader, "John", 3)

    assert source.fetches == ["John"]
    print("✓ get_chapter: one retrieval per book")


def test_get_chapter_swallows_unexpected_errors():
    """Errors outside BookSourceError still come back as None."""

    class ExplodingSource(BookSource):
        def fetch(self, book_id):
            raise RuntimeError("disk on fire")

    loader = BookLoader(ExplodingSource())
    assert get_chapter(loader, "Genesis", 1) is None
    print("✓ get_chapter: unexpected errors normalized to None")


def main():
    """Run all tests."""
    print("=" * 60)
    print("Chapter Test Suite")
    print("=" * 60)

    test_get_chapter_returns_ordered_verses()
    test_get_chapter_orders_unsorted_source_numerically()
    test_get_chapter_missing_chapter_is_none()
    test_get_chapter_missing_book_is_none()
    test_get_chapter_empty_chapter_has_no_verses()
    test_get_chapter_reuses_cached_book()
    test_get_chapter_swallows_unexpected_errors()

    print("\n" + "=" * 60)
    print("ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
