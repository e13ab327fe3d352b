"""Utility modules for substack-notes."""

from substack_notes.utils.logging import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
