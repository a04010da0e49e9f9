# api/utils/errors.py
"""
Standardized API error responses for the scripture endpoints.

All errors follow the format: {"error": "error_code", "detail": "optional message"}

Error codes are snake_case and machine-parseable.
"""

from flask import jsonify
from typing import Optional


def error_response(
    code: str,
    status: int = 400,
    detail: Optional[str] = None,
    **extra
):
    """
    Create a standardized error response.

    Args:
        code: Machine-readable error code (snake_case)
        status: HTTP status code
        detail: Human-readable explanation (optional)
        **extra: Additional fields to include in response

    Returns:
        Tuple of (jsonify response, status code)
    """
    payload = {"error": code}
    if detail:
        payload["detail"] = detail
    payload.update(extra)
    return jsonify(payload), status


# Validation (400)
def missing_field(field: str):
    """Required parameter or body field is missing."""
    return error_response(f"{field}_required", 400, f"Missing required field: {field}")


def invalid_field(field: str, detail: str = None):
    """Parameter or body field value is invalid."""
    return error_response(f"invalid_{field}", 400, detail)


# Not Found (404)
def chapter_not_found(book: str, chapter: int):
    """Book or chapter is not available from the book source."""
    return error_response(
        "chapter_not_found",
        404,
        f"{book} {chapter} not found",
        book=book,
        chapter=chapter,
    )
