"""
Logging helpers for safe error handling and message sanitization.

This module provides utilities to prevent information leakage through
error messages while preserving detailed logging for debugging.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def sanitize_exception_message(e: Exception, safe_message: str = "An error occurred") -> str:
    """
    Sanitize exception message for user display.

    Store errors can carry connection strings, hostnames or AQL fragments.
    The full exception is logged here; only the generic message is returned.

    Args:
        e: The exception to sanitize
        safe_message: Generic message to return to users

    Returns:
        Safe error message for user display

    Example:
        >>> try:
        ...     raise FetchError("http://arango:8529 refused connection")
        ... except FetchError as e:
        ...     detail = sanitize_exception_message(e, "Analytics unavailable")
    """
    logger.exception(f"[security] Exception sanitized: {e}")
    return safe_message
