# api/tests/test_search.py
"""
Tests for the verse search engine.
"""

from scripture_fixtures import TEST_CATALOG, make_loader

from services.scripture import (
    Book,
    MatchSpan,
    SearchParams,
    Testament,
    render_highlights,
    search,
)


def test_blank_query_returns_nothing_without_fetching():
    loader, source = make_loader()

    for query in ("", "   ", "\t\n"):
        assert search(loader, SearchParams(query=query), TEST_CATALOG) == []

    assert source.fetches == []
    print("✓ search: blank query short-circuits")


def test_any_scope_scans_whole_catalog():
    loader, source = make_loader()

    search(loader, SearchParams(query="zzz"), TEST_CATALOG)

    assert source.fetches == ["Genesis", "Psalms", "John", "1John"]
    print("✓ search: book=any, testament=any scans every book")


def test_book_scope_ignores_testament():
    loader, source = make_loader()

    results = search(
        loader,
        SearchParams(query="light", book="Genesis", testament="NEW"),
        TEST_CATALOG,
    )

    assert source.fetches == ["Genesis"]
    assert [r.reference for r in results] == ["Genesis 1:3"]
    print("✓ search: specific book overrides testament filter")


def test_unknown_book_scope_is_empty():
    loader, source = make_loader()

    assert search(loader, SearchParams(query="light", book="Tobit"), TEST_CATALOG) == []
    assert source.fetches == []
    print("✓ search: unknown book searches nothing")


def test_testament_scope():
    loader, source = make_loader()

    results = search(loader, SearchParams(query="light", testament="new"), TEST_CATALOG)

    assert source.fetches == ["John", "1John"]
    assert [r.reference for r in results] == ["John 1:5", "1 John 1:5"]
    assert all(r.book.testament == Testament.NEW for r in results)
    print("✓ search: testament filter restricts scope")


def test_invalid_testament_is_empty():
    loader, source = make_loader()

    assert search(loader, SearchParams(query="light", testament="middle"), TEST_CATALOG) == []
    assert source.fetches == []
    print("✓ search: unknown testament returns nothing")


def test_non_numeric_chapter_is_empty():
    loader, source = make_loader()

    for chapter in ("abc", "1a", "0", "-2"):
        assert search(loader, SearchParams(query="God", chapter=chapter), TEST_CATALOG) == []

    assert source.fetches == []
    print("✓ search: invalid chapter filter returns nothing")


def test_chapter_filter():
    loader, _ = make_loader()

    results = search(loader, SearchParams(query="God", chapter=" 3 "), TEST_CATALOG)

    assert [r.reference for r in results] == ["John 3:16"]
    assert results[0].chapter == 3
    assert results[0].verse == 16
    print("✓ search: chapter filter restricts to one chapter")


def test_result_order_and_fields():
    loader, _ = make_loader()

    results = search(loader, SearchParams(query="light"), TEST_CATALOG)

    assert [r.reference for r in results] == ["Genesis 1:3", "John 1:5", "1 John 1:5"]
    first = results[0]
    assert first.book == Book("Genesis", Testament.OLD)
    assert first.text == "And God said, Let there be light: and there was light."
    assert len(first.spans) == 2
    print("✓ search: book, chapter, verse order with plain text")


def test_case_insensitive_all_occurrences():
    """Searching "god" marks both "God" and "god"."""
    loader, _ = make_loader({"Genesis": {"chapters": {"1": {"1": "God is good, god."}}}})

    results = search(loader, SearchParams(query="god", book="Genesis"), TEST_CATALOG)

    assert len(results) == 1
    assert results[0].spans == [MatchSpan(0, 3), MatchSpan(13, 16)]
    assert render_highlights(results[0]) == "<strong>God</strong> is good, <strong>god</strong>."
    assert results[0].highlighted("[", "]") == "[God] is good, [god]."
    print("✓ search: case-insensitive, every occurrence marked")


def test_query_is_literal():
    """Regex metacharacters in the query are matched literally."""
    loader, _ = make_loader({
        "Genesis": {"chapters": {"1": {"1": "a.b (c)", "2": "axb c"}}}
    })

    dot = search(loader, SearchParams(query="a.b", book="Genesis"), TEST_CATALOG)
    paren = search(loader, SearchParams(query="(c)", book="Genesis"), TEST_CATALOG)

    assert [r.verse for r in dot] == [1]
    assert [r.verse for r in paren] == [1]
    assert paren[0].spans == [MatchSpan(4, 7)]
    print("✓ search: query has literal substring semantics")


def test_match_uses_lowercase_containment():
    """A verse matches when query.lower() is in text.lower()."""
    loader, _ = make_loader({
        "Genesis": {"chapters": {"1": {
            "1": "the garden of Éden",
            "2": "Bleſſed are they",
        }}}
    })

    eden = search(loader, SearchParams(query="éDEN", book="Genesis"), TEST_CATALOG)
    assert [r.verse for r in eden] == [1]
    assert eden[0].spans == [MatchSpan(14, 18)]

    # Long s lowercases to itself, so "s" is not contained
    long_s = search(loader, SearchParams(query="s", book="Genesis"), TEST_CATALOG)
    assert long_s == []
    print("✓ search: matching follows lowercase substring containment")


def test_unavailable_books_are_skipped():
    loader, source = make_loader()
    catalog = [Book("Exodus", Testament.OLD)] + TEST_CATALOG

    results = search(loader, SearchParams(query="shepherd"), catalog)

    assert source.fetches[0] == "Exodus"
    assert [r.reference for r in results] == ["Psalms 23:1"]
    print("✓ search: missing books skipped, search continues")


def test_limit():
    loader, _ = make_loader()

    results = search(loader, SearchParams(query="God", limit=2), TEST_CATALOG)

    assert [r.reference for r in results] == ["Genesis 1:1", "Genesis 1:3"]
    assert search(loader, SearchParams(query="God", limit=0), TEST_CATALOG) == []
    print("✓ search: limit caps the result count")


def test_to_dict():
    loader, _ = make_loader()

    result = search(loader, SearchParams(query="shepherd"), TEST_CATALOG)[0]

    assert result.to_dict() == {
        "reference": "Psalms 23:1",
        "book": {"name": "Psalms", "testament": "OLD"},
        "chapter": 23,
        "verse": 1,
        "text": "The LORD is my shepherd; I shall not want.",
        "spans": [{"start": 15, "end": 23}],
    }
    print("✓ SearchResult.to_dict")


def main():
    """Run all tests."""
    print("=" * 60)
    print("Search Test Suite")
    print("=" * 60)

    test_blank_query_returns_nothing_without_fetching()
    test_any_scope_scans_whole_catalog()
    test_book_scope_ignores_testament()
    test_unknown_book_scope_is_empty()
    test_testament_scope()
    test_invalid_testament_is_empty()
    test_non_numeric_chapter_is_empty()
    test_chapter_filter()
    test_result_order_and_fields()
    test_case_insensitive_all_occurrences()
    test_query_is_literal()
    test_match_uses_lowercase_containment()
    test_unavailable_books_are_skipped()
    test_limit()
    test_to_dict()

    print("\n" + "=" * 60)
    print("ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
