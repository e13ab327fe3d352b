"""Serialization of note documents to the Substack feed request format.

The feed endpoint expects a ``bodyJson`` document:

    {"type": "doc", "attrs": {"schemaVersion": "v1"}, "content": [...]}

where ``content`` holds ``paragraph``, ``bulletList`` and ``orderedList``
nodes. List nodes nest as ``listItem -> paragraph -> text``.
"""

from __future__ import annotations

from typing import Any

from substack_notes.models import NoteValidationError
from substack_notes.note.document import (
    ListKind,
    NoteDocument,
    NoteList,
    Paragraph,
    SegmentKind,
    TextSegment,
)

SCHEMA_VERSION = "v1"
TAB_ID = "for-you"
SURFACE = "feed"
REPLY_MINIMUM_ROLE = "everyone"

EMPTY_NOTE_MESSAGE = "note must contain at least one paragraph"
EMPTY_PARAGRAPH_MESSAGE = "paragraph must contain at least one content block"
MISSING_URL_MESSAGE = "link segment must have a URL"

_LIST_NODE_TYPES: dict[ListKind, str] = {
    ListKind.BULLET: "bulletList",
    ListKind.NUMBERED: "orderedList",
}


def segment_to_node(segment: TextSegment) -> dict[str, Any]:
    """Convert a text segment to a ``text`` node.

    Simple segments carry no ``marks`` key at all.

    Raises:
        NoteValidationError: If a link segment has no URL
    """
    node: dict[str, Any] = {"type": "text", "text": segment.text}

    match segment.kind:
        case SegmentKind.SIMPLE:
            return node
        case SegmentKind.LINK:
            if not segment.url:
                raise NoteValidationError(MISSING_URL_MESSAGE)
            node["marks"] = [{"type": "link", "attrs": {"href": segment.url}}]
        case SegmentKind.BOLD | SegmentKind.ITALIC | SegmentKind.CODE | SegmentKind.UNDERLINE:
            node["marks"] = [{"type": segment.kind.value}]

    return node


def _paragraph_node(segments: tuple[TextSegment, ...]) -> dict[str, Any]:
    return {"type": "paragraph", "content": [segment_to_node(s) for s in segments]}


def list_to_node(note_list: NoteList) -> dict[str, Any]:
    """Convert a list to a ``bulletList`` or ``orderedList`` node."""
    return {
        "type": _LIST_NODE_TYPES[note_list.kind],
        "content": [
            {"type": "listItem", "content": [_paragraph_node(item.segments)]}
            for item in note_list.items
        ],
    }


def paragraph_to_nodes(paragraph: Paragraph) -> list[dict[str, Any]]:
    """Convert a paragraph to its top-level nodes.

    Emits one ``paragraph`` node when the paragraph has inline segments,
    followed by one list node per list in insertion order.
    """
    nodes: list[dict[str, Any]] = []
    if paragraph.segments:
        nodes.append(_paragraph_node(paragraph.segments))
    nodes.extend(list_to_node(note_list) for note_list in paragraph.lists)
    return nodes


def validate_document(document: NoteDocument) -> None:
    """Check the document-level invariants.

    Link URLs are checked while converting segments.

    Raises:
        NoteValidationError: If the note or one of its paragraphs is empty
    """
    if not document.paragraphs:
        raise NoteValidationError(EMPTY_NOTE_MESSAGE)

    for paragraph in document.paragraphs:
        if paragraph.is_empty():
            raise NoteValidationError(EMPTY_PARAGRAPH_MESSAGE)


def to_body_json(document: NoteDocument) -> dict[str, Any]:
    """Build the ``bodyJson`` document for a validated note."""
    content: list[dict[str, Any]] = []
    for paragraph in document.paragraphs:
        content.extend(paragraph_to_nodes(paragraph))

    return {
        "type": "doc",
        "attrs": {"schemaVersion": SCHEMA_VERSION},
        "content": content,
    }


def to_note_request(document: NoteDocument) -> dict[str, Any]:
    """Validate a note document and build the feed publish request.

    Args:
        document: The note to serialize

    Returns:
        Request body for ``POST /api/v1/comment/feed``

    Raises:
        NoteValidationError: If the document breaks an invariant
    """
    validate_document(document)

    request: dict[str, Any] = {
        "bodyJson": to_body_json(document),
        "tabId": TAB_ID,
        "surface": SURFACE,
        "replyMinimumRole": REPLY_MINIMUM_ROLE,
    }

    if document.attachment_ids:
        request["attachmentIds"] = list(document.attachment_ids)

    return request


def build_attachment_request(url: str) -> dict[str, Any]:
    """Build the request body for ``POST /api/v1/comment/attachment``."""
    return {"url": url, "type": "link"}
