# routes/scripture_api.py
"""
API endpoints for scripture lookup.

Provides access to:
- The book catalog
- Single chapters
- Full-text search
- Resolution of stored favorites and highlights
- Book cache statistics
"""

from flask import Blueprint, request, jsonify

from services.scripture import ScriptureService, SearchParams, Testament, get_book_cache
from utils.errors import chapter_not_found, invalid_field, missing_field

scripture_bp = Blueprint("scripture_api", __name__, url_prefix="/api/scripture")

# Lazily initialized service instance
_service = None


def get_service() -> ScriptureService:
    """Get or create ScriptureService instance."""
    global _service
    if _service is None:
        _service = ScriptureService(cache=get_book_cache())
    return _service


def set_service(service: ScriptureService) -> None:
    """Replace the service instance (app factory and tests)."""
    global _service
    _service = service


# =============================================================================
# Catalog & Chapter Endpoints
# =============================================================================

@scripture_bp.get("/books")
def list_books():
    """
    List catalog books.

    Query params:
        testament: "OLD", "NEW" or "any" (optional)

    Returns:
        {"books": [{"name": "Genesis", "testament": "OLD"}, ...]}
    """
    try:
        testament = Testament.parse(request.args.get("testament", "any"))
    except ValueError:
        return invalid_field("testament", "testament must be OLD, NEW or any")

    books = get_service().list_books(testament)
    return jsonify({"books": [b.to_dict() for b in books]})


@scripture_bp.get("/chapter")
def get_chapter():
    """
    Get one chapter.

    Query params:
        book: Book name (required) e.g., "Genesis"
        chapter: Chapter number (required)

    Returns:
        {"reference": "Genesis 1", "verses": [...]}
    """
    book = request.args.get("book")
    if not book:
        return missing_field("book")

    raw_chapter = request.args.get("chapter", "").strip()
    if not raw_chapter:
        return missing_field("chapter")
    try:
        chapter = int(raw_chapter)
    except ValueError:
        chapter = 0
    if chapter < 1:
        return invalid_field("chapter", "chapter must be a positive integer")

    result = get_service().get_chapter(book, chapter)
    if result is None:
        return chapter_not_found(book, chapter)
    return jsonify(result.to_dict())


# =============================================================================
# Search Endpoint
# =============================================================================

@scripture_bp.get("/search")
def search_scripture():
    """
    Search verse text.

    Query params:
        q: Search query (required)
        testament: "OLD", "NEW" or "any" (optional, default "any")
        book: Book name or "any" (optional, default "any")
        chapter: Chapter number (optional)
        limit: Maximum results (optional)
        markup: If "true", include text with <strong> markers (optional)

    Returns:
        {
            "query": "light",
            "count": 2,
            "results": [...]
        }
    """
    query = request.args.get("q")
    if not query:
        return missing_field("q")

    limit = None
    raw_limit = request.args.get("limit", "").strip()
    if raw_limit:
        try:
            limit = int(raw_limit)
        except ValueError:
            limit = 0
    if limit is not None and limit < 1:
        return invalid_field("limit", "limit must be a positive integer")

    params = SearchParams(
        query=query,
        testament=request.args.get("testament", "any"),
        book=request.args.get("book", "any"),
        chapter=request.args.get("chapter", ""),
        limit=limit,
    )
    markup = request.args.get("markup", "").lower() == "true"

    results = get_service().search(params)
    payload = []
    for r in results:
        item = r.to_dict()
        if markup:
            item["html"] = r.highlighted()
        payload.append(item)

    return jsonify({"query": query, "count": len(payload), "results": payload})


# =============================================================================
# Resolution Endpoints
# =============================================================================

@scripture_bp.post("/favorites/resolve")
def resolve_favorites():
    """
    Resolve favorite reference keys to verse text.

    Request body:
        {"refs": ["KJV:Genesis:1:1", "KJV:John:3:16"]}

    Returns:
        {"favorites": [{"ref": ..., "reference": "Genesis 1:1", "text": ...}]}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    refs = data.get("refs")
    if refs is None:
        return missing_field("refs")
    if not isinstance(refs, list):
        return invalid_field("refs", "refs must be a list of reference keys")

    favorites = get_service().resolve_favorites(refs)
    return jsonify({"favorites": [f.to_dict() for f in favorites]})


@scripture_bp.post("/highlights/resolve")
def resolve_highlights():
    """
    Resolve highlight records to verse text.

    Request body:
        {"highlights": [{"ref": "KJV:John:3:16", "color": "yellow"}]}

    Returns:
        {"highlights": [{"ref": ..., "color": "yellow", "text": ...}]}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    highlights = data.get("highlights")
    if highlights is None:
        return missing_field("highlights")
    if not isinstance(highlights, list):
        return invalid_field("highlights", "highlights must be a list of objects")

    resolved = get_service().resolve_highlights(highlights)
    return jsonify({"highlights": [h.to_dict() for h in resolved]})


# =============================================================================
# Cache Endpoints
# =============================================================================

@scripture_bp.get("/cache/stats")
def cache_stats():
    """Get book cache statistics."""
    return jsonify(get_service().cache_stats())


@scripture_bp.post("/cache/clear")
def clear_cache():
    """Clear the book cache."""
    return jsonify(get_service().clear_cache())
