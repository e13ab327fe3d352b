"""Unit tests for logging utilities."""

from __future__ import annotations

import logging

from substack_notes.utils.logging import CookieMaskingFilter, get_logger, setup_logging


def make_record(msg: str, args: tuple[object, ...] = ()) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


class TestCookieMaskingFilter:
    """Tests for CookieMaskingFilter."""

    def test_masks_cookie_header(self) -> None:
        """Test masking of the Cookie header value."""
        record = make_record("Cookie: substack.sid=s%3Asecret.value; other=1")

        assert CookieMaskingFilter().filter(record) is True
        assert record.msg == "Cookie: substack.sid=[MASKED]; other=1"

    def test_masks_connect_sid(self) -> None:
        """Test masking of the legacy connect.sid cookie."""
        record = make_record("connect.sid=abc123")

        CookieMaskingFilter().filter(record)

        assert "abc123" not in record.msg

    def test_masks_dict_format(self) -> None:
        """Test masking of cookie and token values in dict reprs."""
        record = make_record("%s", ("{'substack.sid': 'abc', 'token': 'xyz'}",))

        CookieMaskingFilter().filter(record)

        assert record.getMessage() == "{'substack.sid': '[MASKED]', 'token': '[MASKED]'}"

    def test_non_string_args_untouched(self) -> None:
        """Test that non-string args pass through unchanged."""
        record = make_record("%d requests", (3,))

        CookieMaskingFilter().filter(record)

        assert record.getMessage() == "3 requests"


class TestSetupLogging:
    """Tests for setup_logging and get_logger."""

    def test_setup_installs_single_masking_handler(self) -> None:
        """Test that repeated setup does not duplicate handlers."""
        setup_logging(logging.DEBUG, name="substack_notes.test_setup")
        logger = setup_logging(logging.DEBUG, name="substack_notes.test_setup")

        assert len(logger.handlers) == 1
        assert any(isinstance(f, CookieMaskingFilter) for f in logger.handlers[0].filters)
        assert logger.level == logging.DEBUG

    def test_get_logger_namespace(self) -> None:
        """Test that get_logger returns loggers under substack_notes."""
        assert get_logger().name == "substack_notes"
        assert get_logger("api").name == "substack_notes.api"
