"""Authentication module for substack-notes.

Provides keyring-backed session management.
"""

from substack_notes.auth.session import KeyringError, SessionManager

__all__ = ["SessionManager", "KeyringError"]
