"""
Helpers package.
"""

from .exceptions import FetchError
from .logging_helper import sanitize_exception_message

__all__ = [
    "FetchError",
    "sanitize_exception_message",
]
