"""Note composition module for substack-notes.

Provides the note document model, the immutable builders and the
serializer for the Substack feed request format.
"""

from substack_notes.note.builder import (
    ListBuilder,
    ListItemBuilder,
    NoteBuilder,
    NoteWithLinkBuilder,
    ParagraphBuilder,
)
from substack_notes.note.document import (
    ListItem,
    ListKind,
    NoteDocument,
    NoteList,
    Paragraph,
    SegmentKind,
    TextSegment,
)
from substack_notes.note.serializer import to_note_request

__all__ = [
    "ListBuilder",
    "ListItem",
    "ListItemBuilder",
    "ListKind",
    "NoteBuilder",
    "NoteDocument",
    "NoteList",
    "NoteWithLinkBuilder",
    "Paragraph",
    "ParagraphBuilder",
    "SegmentKind",
    "TextSegment",
    "to_note_request",
]
