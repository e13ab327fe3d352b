"""Note operations for the Substack API.

Provides builder factories and convenience functions for publishing notes.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from substack_notes.api.client import SubstackAPIClient
from substack_notes.models import NoteValidationError, Session, SubstackAPIError
from substack_notes.note.builder import NoteBuilder, NoteClient, NoteWithLinkBuilder
from substack_notes.note.serializer import EMPTY_NOTE_MESSAGE

logger = logging.getLogger(__name__)

# Lightweight endpoint without side effects, used to check the session
CONNECTIVITY_PATH = "/api/v1/feed/following"

_BLANK_LINES = re.compile(r"\n\s*\n")


def new_note(client: NoteClient) -> NoteBuilder:
    """Start a new note."""
    return NoteBuilder(client)


def new_note_with_link(client: NoteClient, link_url: str) -> NoteWithLinkBuilder:
    """Start a new note that is published with a link attachment."""
    return NoteWithLinkBuilder(client, link_url)


def split_paragraphs(text: str) -> list[str]:
    """Split plain text into paragraphs on blank lines.

    Leading and trailing whitespace of each paragraph is removed and
    empty paragraphs are dropped.
    """
    return [part.strip() for part in _BLANK_LINES.split(text) if part.strip()]


async def publish_text_note(
    session: Session,
    text: str,
    link_url: str | None = None,
) -> dict[str, Any]:
    """Publish a plain-text note.

    Each block of text separated by a blank line becomes one paragraph.

    Args:
        session: Authenticated session
        text: Note text
        link_url: URL to attach as a link preview (optional)

    Returns:
        Raw JSON response of the feed endpoint

    Raises:
        NoteValidationError: If the text is blank
        SubstackAPIError: If an API request fails
    """
    paragraphs = split_paragraphs(text)
    if not paragraphs:
        raise NoteValidationError(EMPTY_NOTE_MESSAGE)

    async with SubstackAPIClient(session) as client:
        builder = new_note_with_link(client, link_url) if link_url else new_note(client)
        paragraph = builder.paragraph().text(paragraphs[0])
        for text_block in paragraphs[1:]:
            paragraph = paragraph.paragraph().text(text_block)
        return await paragraph.publish()


async def check_connectivity(session: Session | None) -> bool:
    """Check whether the API is reachable with the given session.

    Args:
        session: Session to check (None checks anonymous access)

    Returns:
        True if the API answered successfully, False otherwise
    """
    async with SubstackAPIClient(session) as client:
        try:
            await client.get(CONNECTIVITY_PATH)
        except (SubstackAPIError, httpx.HTTPError) as e:
            logger.info("Connectivity check failed: %s", e)
            return False
    return True
