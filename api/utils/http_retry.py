# api/utils/http_retry.py
"""
HTTP GET with retry for rate limits and transient errors.

Used by the HTTP book source when book files are served remotely.

Usage:
    from utils.http_retry import get_with_retry

    response = get_with_retry(
        url="https://example.org/data/json/Genesis.json",
        timeout=15,
    )
    data = response.json()
"""

import logging
import time
import requests
from typing import Optional

logger = logging.getLogger(__name__)


class HttpRetryError(RuntimeError):
    """
    Raised when a GET cannot be completed.

    Attributes:
        status_code: Last HTTP status seen, or None for transport failures
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _retry_wait(response: requests.Response, attempt: int) -> Optional[int]:
    """
    Seconds to wait before retrying this response, or None if it is final.

    429 honors a numeric Retry-After header; 429 without one and 5xx back
    off exponentially.
    """
    if response.status_code == 429:
        retry_after = response.headers.get("retry-after")
        if retry_after and retry_after.isdigit():
            return int(retry_after)
        return min(2 ** attempt * 2, 30)
    if response.status_code >= 500:
        return 2 ** attempt
    return None


def get_with_retry(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: int = 15,
    max_retries: int = 3,
) -> requests.Response:
    """
    GET with automatic retry for rate limits and transient server errors.

    Retry behavior:
    - 429 (rate limit): Respects Retry-After header, falls back to exponential backoff
    - 5xx (server error): Exponential backoff
    - Connection errors: Exponential backoff
    - 4xx (client error): No retry (caller's problem)
    - Timeout: No retry (raises immediately)

    No wait follows the last attempt.

    Args:
        url: Resource URL
        params: Query parameters
        headers: HTTP headers
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts

    Returns:
        requests.Response on success

    Raises:
        HttpRetryError: On timeout, client errors, or exhausted retries
    """
    last_status = None

    for attempt in range(max_retries):
        final = attempt == max_retries - 1

        try:
            response = requests.get(
                url, params=params, headers=headers, timeout=timeout
            )
        except requests.ConnectionError as e:
            if final:
                raise HttpRetryError(
                    f"Connection to {url} failed after {max_retries} attempts: {e}"
                )
            wait = 2 ** attempt
            logger.warning(f"Connection error to {url}, retrying in {wait}s: {e}")
            time.sleep(wait)
            continue
        except requests.Timeout:
            raise HttpRetryError(f"Request to {url} timed out after {timeout}s")

        wait = _retry_wait(response, attempt)
        if wait is None:
            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                raise HttpRetryError(
                    f"HTTP error from {url}: {e}", status_code=response.status_code
                )
            return response

        last_status = response.status_code
        if final:
            break
        logger.warning(
            f"Status {last_status} from {url}, retrying in {wait}s "
            f"(attempt {attempt + 1}/{max_retries})"
        )
        time.sleep(wait)

    raise HttpRetryError(
        f"Request to {url} failed after {max_retries} attempts "
        f"(last status: {last_status or 'unknown'})",
        status_code=last_status,
    )
