"""Secure logging configuration for substack-notes.

Provides logging setup with cookie value masking for security.
Authentication cookie values are completely masked in all log output.
"""

import logging
import re

ROOT_LOGGER_NAME = "substack_notes"


class CookieMaskingFilter(logging.Filter):
    """Logging filter that masks cookie values for security.

    All authentication cookie values are replaced with [MASKED] to prevent
    credential leakage in logs.
    """

    COOKIE_PATTERNS = [
        # substack.sid=VALUE or connect.sid: VALUE
        re.compile(r"((?:substack|connect)\.sid\s*[=:]\s*)([^\s;,}\"']+)"),
        # Cookie dict format {"substack.sid": "value"}
        re.compile(r"([\"'](?:substack|connect)\.sid[\"']\s*:\s*[\"'])([^\"']+)([\"'])"),
        # Session dict format {"token": "value"}
        re.compile(r"([\"']token[\"']\s*:\s*[\"'])([^\"']+)([\"'])"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask cookie values in log records.

        Returns:
            Always True (record is always passed through, just modified)
        """
        if record.msg:
            record.msg = self._mask_cookies(str(record.msg))
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(self._mask_cookies(arg) if isinstance(arg, str) else arg for arg in record.args)
        return True

    def _mask_cookies(self, text: str) -> str:
        """Mask all cookie values in text."""

        def mask_match(m: re.Match[str]) -> str:
            suffix = m.group(3) if m.lastindex and m.lastindex > 2 else ""
            return m.group(1) + "[MASKED]" + suffix

        result = text
        for pattern in self.COOKIE_PATTERNS:
            result = pattern.sub(mask_match, result)
        return result


def setup_logging(level: int = logging.INFO, name: str | None = None) -> logging.Logger:
    """Set up logging with cookie masking.

    Args:
        level: Logging level (default: INFO)
        name: Logger name (default: "substack_notes")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    handler.addFilter(CookieMaskingFilter())

    logger.addHandler(handler)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the substack_notes namespace.

    Args:
        name: Logger name suffix (e.g., "api" for "substack_notes.api")
    """
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
