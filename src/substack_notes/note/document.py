"""Value types for note documents.

A note is a tuple of paragraphs; each paragraph holds inline text segments
and any number of block lists. All models are frozen and every ``with_*``
helper returns a new instance, so snapshots can be shared freely.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SegmentKind(str, Enum):
    """Inline style of a text segment."""

    SIMPLE = "simple"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    UNDERLINE = "underline"
    LINK = "link"


class ListKind(str, Enum):
    """Kind of block list."""

    BULLET = "bullet"
    NUMBERED = "numbered"


class TextSegment(BaseModel):
    """A run of text with a single style.

    Attributes:
        text: The text content
        kind: Inline style
        url: Link target, only meaningful for ``SegmentKind.LINK``
    """

    model_config = ConfigDict(frozen=True)

    text: str
    kind: SegmentKind = SegmentKind.SIMPLE
    url: str | None = None


class ListItem(BaseModel):
    """One list item. List items cannot contain nested lists."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[TextSegment, ...] = ()

    def with_segment(self, segment: TextSegment) -> ListItem:
        return ListItem(segments=(*self.segments, segment))


class NoteList(BaseModel):
    """A bullet or numbered list."""

    model_config = ConfigDict(frozen=True)

    kind: ListKind
    items: tuple[ListItem, ...] = ()

    def with_item(self, item: ListItem) -> NoteList:
        return NoteList(kind=self.kind, items=(*self.items, item))


class Paragraph(BaseModel):
    """A paragraph: inline segments followed by zero or more lists."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[TextSegment, ...] = ()
    lists: tuple[NoteList, ...] = ()

    def with_segment(self, segment: TextSegment) -> Paragraph:
        return Paragraph(segments=(*self.segments, segment), lists=self.lists)

    def with_list(self, note_list: NoteList) -> Paragraph:
        return Paragraph(segments=self.segments, lists=(*self.lists, note_list))

    def is_empty(self) -> bool:
        return not self.segments and not self.lists


class NoteDocument(BaseModel):
    """Root aggregate of a note.

    Attributes:
        paragraphs: Committed paragraphs in display order
        attachment_ids: Attachment IDs referenced by the note, if any
    """

    model_config = ConfigDict(frozen=True)

    paragraphs: tuple[Paragraph, ...] = ()
    attachment_ids: tuple[str, ...] | None = None

    def with_paragraph(self, paragraph: Paragraph) -> NoteDocument:
        return NoteDocument(
            paragraphs=(*self.paragraphs, paragraph),
            attachment_ids=self.attachment_ids,
        )

    def with_attachment_ids(self, attachment_ids: tuple[str, ...] | list[str]) -> NoteDocument:
        return NoteDocument(paragraphs=self.paragraphs, attachment_ids=tuple(attachment_ids))
