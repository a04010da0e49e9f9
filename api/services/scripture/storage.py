# api/services/scripture/storage.py
"""
Configuration for the scripture services.

Settings come from environment variables so the book data can live on
local disk or behind a static file server without code changes.
"""

import os
from pathlib import Path
from typing import Optional


class ScriptureStorage:
    """
    Resolves where book JSON files live and how to fetch them.

    Environment:
        SCRIPTURE_SOURCE: "file" (default) or "http"
        SCRIPTURE_DATA_PATH: Directory holding <Book>.json files
        SCRIPTURE_BASE_URL: Base URL for the http source
        SCRIPTURE_REQUEST_TIMEOUT: HTTP timeout in seconds
        SCRIPTURE_MAX_RETRIES: HTTP retry attempts
        SCRIPTURE_CATALOG_PATH: Optional catalog JSON file
    """

    def __init__(self):
        self.source_kind = os.getenv("SCRIPTURE_SOURCE", "file").strip().lower()
        self.data_path = Path(os.getenv("SCRIPTURE_DATA_PATH", "data/json"))
        self.base_url = os.getenv("SCRIPTURE_BASE_URL", "http://localhost:5173/data/json")
        self.request_timeout = int(os.getenv("SCRIPTURE_REQUEST_TIMEOUT", "15"))
        self.max_retries = int(os.getenv("SCRIPTURE_MAX_RETRIES", "3"))

    @property
    def catalog_path(self) -> Optional[Path]:
        """Path to a custom catalog file, if configured."""
        path = os.getenv("SCRIPTURE_CATALOG_PATH")
        return Path(path) if path else None

    def to_dict(self) -> dict:
        return {
            "source": self.source_kind,
            "data_path": str(self.data_path),
            "base_url": self.base_url,
            "request_timeout": self.request_timeout,
            "max_retries": self.max_retries,
            "catalog_path": str(self.catalog_path) if self.catalog_path else None,
        }
