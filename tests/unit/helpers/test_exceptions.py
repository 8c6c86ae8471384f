"""Unit tests for bundlr.helpers.exceptions and logging_helper."""

import logging

import pytest

from bundlr.helpers.exceptions import FetchError
from bundlr.helpers.logging_helper import sanitize_exception_message


class TestFetchError:
    """Tests for FetchError exception."""

    @pytest.mark.unit
    def test_fetch_error_is_exception(self) -> None:
        assert issubclass(FetchError, Exception)

    @pytest.mark.unit
    def test_fetch_error_stores_message_and_offset(self) -> None:
        error = FetchError("page failed", offset=2000)
        assert str(error) == "page failed"
        assert error.offset == 2000

    @pytest.mark.unit
    def test_offset_defaults_to_none(self) -> None:
        assert FetchError("boom").offset is None


class TestSanitizeExceptionMessage:
    """Tests for sanitize_exception_message()."""

    @pytest.mark.unit
    def test_returns_safe_message_only(self) -> None:
        detail = sanitize_exception_message(FetchError("http://arango:8529 refused"), "Analytics unavailable")
        assert detail == "Analytics unavailable"

    @pytest.mark.unit
    def test_logs_full_exception(self, caplog) -> None:
        with caplog.at_level(logging.ERROR):
            try:
                raise FetchError("http://arango:8529 refused")
            except FetchError as e:
                sanitize_exception_message(e)

        assert "arango:8529" in caplog.text
