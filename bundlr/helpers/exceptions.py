"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class FetchError(Exception):
    """Raised when the transaction store fails to return a page of records.

    Fatal for an analytics computation: the whole run aborts and no partial
    result is returned. Not retried internally.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
