"""Pytest configuration and shared fixtures for substack-notes tests."""

from __future__ import annotations

import json
import time
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from substack_notes.models import Session
from tests.factories import create_publish_response

# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def mock_session() -> Session:
    """Create a valid session for testing."""
    return Session(
        token="token123",
        hostname="example.substack.com",
        user_id=12345,
        created_at=int(time.time()),
        expires_at=int(time.time()) + 3600,
    )


@pytest.fixture
def expired_session() -> Session:
    """Create an expired session for testing."""
    return Session(
        token="token123",
        created_at=int(time.time()) - 7200,
        expires_at=int(time.time()) - 3600,
    )


# ============================================================================
# Keyring Fixtures
# ============================================================================


@pytest.fixture
def mock_keyring() -> Generator[MagicMock, None, None]:
    """Create a mock keyring for testing session storage."""
    with patch("substack_notes.auth.session.keyring") as mock:
        mock.get_password.return_value = None
        yield mock


@pytest.fixture
def mock_keyring_with_session(mock_keyring: MagicMock, mock_session: Session) -> MagicMock:
    """Create a mock keyring with a stored session."""
    mock_keyring.get_password.return_value = json.dumps(mock_session.model_dump())
    return mock_keyring


# ============================================================================
# API Client Fixtures
# ============================================================================


@pytest.fixture
def note_client() -> AsyncMock:
    """Create a mock publishing client for builder tests.

    Configure ``post.return_value`` or ``post.side_effect`` per test.
    """
    client = AsyncMock()
    client.post.return_value = create_publish_response()
    return client


@pytest.fixture
def mock_api_client() -> Generator[AsyncMock, None, None]:
    """Patch SubstackAPIClient in the notes module.

    Yields:
        The client instance returned by ``async with SubstackAPIClient(...)``.
    """
    with patch("substack_notes.api.notes.SubstackAPIClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client_class.return_value = mock_client
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        yield mock_client

