"""substack-notes: compose and publish Substack notes."""

from substack_notes.api import SubstackAPIClient, check_connectivity, new_note, new_note_with_link, publish_text_note
from substack_notes.models import ErrorCode, NoteValidationError, Session, SubstackAPIError
from substack_notes.note import NoteBuilder, NoteWithLinkBuilder

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "NoteBuilder",
    "NoteValidationError",
    "NoteWithLinkBuilder",
    "Session",
    "SubstackAPIClient",
    "SubstackAPIError",
    "check_connectivity",
    "new_note",
    "new_note_with_link",
    "publish_text_note",
]
