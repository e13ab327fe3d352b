"""API module for substack-notes.

Provides HTTP client and note operations for the Substack API.
"""

from substack_notes.api.client import SubstackAPIClient
from substack_notes.api.notes import check_connectivity, new_note, new_note_with_link, publish_text_note

__all__ = [
    "SubstackAPIClient",
    "check_connectivity",
    "new_note",
    "new_note_with_link",
    "publish_text_note",
]
