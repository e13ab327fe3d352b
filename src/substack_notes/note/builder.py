"""Immutable builders for composing and publishing notes.

Usage:
    note = (
        new_note(client)
        .paragraph()
        .text("Check out ")
        .bold("this")
        .bullet_list()
        .item().text("one")
        .item().text("two")
        .finish()
    )
    await note.publish()

Every method that adds content returns a new builder; the receiver is left
untouched, so a partially built note can be branched and each branch built
or published independently. Child builders keep a reference to the parent
builder they were started from, and ``item()``, ``finish()`` and
``paragraph()`` hand a new parent (or sibling) back to the caller.

Validation happens only in ``build()`` and ``publish()``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, Self

from substack_notes.models import parse_attachment_response
from substack_notes.note.document import (
    ListItem,
    ListKind,
    NoteDocument,
    NoteList,
    Paragraph,
    SegmentKind,
    TextSegment,
)
from substack_notes.note.serializer import build_attachment_request, to_note_request

logger = logging.getLogger(__name__)

FEED_PATH = "/api/v1/comment/feed"
ATTACHMENT_PATH = "/api/v1/comment/attachment"


class NoteClient(Protocol):
    """The part of the HTTP client used for publishing."""

    async def post(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]: ...


class ListItemBuilder:
    """Builds the content of one list item."""

    def __init__(self, list_builder: ListBuilder, item: ListItem | None = None) -> None:
        self._list_builder = list_builder
        self._item = item if item is not None else ListItem()

    def _append(self, segment: TextSegment) -> ListItemBuilder:
        return ListItemBuilder(self._list_builder, self._item.with_segment(segment))

    def text(self, text: str) -> ListItemBuilder:
        return self._append(TextSegment(text=text))

    def bold(self, text: str) -> ListItemBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.BOLD))

    def italic(self, text: str) -> ListItemBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.ITALIC))

    def code(self, text: str) -> ListItemBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.CODE))

    def underline(self, text: str) -> ListItemBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.UNDERLINE))

    def link(self, text: str, url: str | None) -> ListItemBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.LINK, url=url))

    @property
    def segments(self) -> tuple[TextSegment, ...]:
        return self._item.segments

    def item(self) -> ListItemBuilder:
        """Commit this item and start the next one in the same list."""
        return self._list_builder.add_item(self._item).item()

    def finish(self) -> ParagraphBuilder:
        """Commit this item and close the list."""
        return self._list_builder.add_item(self._item).finish()


class ListBuilder:
    """Accumulates the items of one bullet or numbered list."""

    def __init__(
        self,
        kind: ListKind,
        paragraph_builder: ParagraphBuilder,
        note_list: NoteList | None = None,
    ) -> None:
        self._paragraph_builder = paragraph_builder
        self._list = note_list if note_list is not None else NoteList(kind=kind)

    @property
    def kind(self) -> ListKind:
        return self._list.kind

    @property
    def items(self) -> tuple[ListItem, ...]:
        return self._list.items

    def add_item(self, item: ListItem) -> ListBuilder:
        return ListBuilder(self._list.kind, self._paragraph_builder, self._list.with_item(item))

    def item(self) -> ListItemBuilder:
        """Start a new, empty item in this list."""
        return ListItemBuilder(self)

    def finish(self) -> ParagraphBuilder:
        """Close the list and return to the paragraph it was started from."""
        return self._paragraph_builder.add_list(self._list)


class ParagraphBuilder:
    """Builds one paragraph of inline text and block lists."""

    def __init__(self, note_builder: NoteBuilder, paragraph: Paragraph | None = None) -> None:
        self._note_builder = note_builder
        self._paragraph = paragraph if paragraph is not None else Paragraph()

    def _append(self, segment: TextSegment) -> ParagraphBuilder:
        return ParagraphBuilder(self._note_builder, self._paragraph.with_segment(segment))

    def text(self, text: str) -> ParagraphBuilder:
        return self._append(TextSegment(text=text))

    def bold(self, text: str) -> ParagraphBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.BOLD))

    def italic(self, text: str) -> ParagraphBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.ITALIC))

    def code(self, text: str) -> ParagraphBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.CODE))

    def underline(self, text: str) -> ParagraphBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.UNDERLINE))

    def link(self, text: str, url: str | None) -> ParagraphBuilder:
        return self._append(TextSegment(text=text, kind=SegmentKind.LINK, url=url))

    def bullet_list(self) -> ListBuilder:
        return ListBuilder(ListKind.BULLET, self)

    def numbered_list(self) -> ListBuilder:
        return ListBuilder(ListKind.NUMBERED, self)

    def add_list(self, note_list: NoteList) -> ParagraphBuilder:
        return ParagraphBuilder(self._note_builder, self._paragraph.with_list(note_list))

    @property
    def content(self) -> Paragraph:
        return self._paragraph

    def paragraph(self) -> ParagraphBuilder:
        """Commit this paragraph and start a new one."""
        return self._note_builder.add_paragraph(self._paragraph).paragraph()

    def build(self) -> dict[str, Any]:
        """Commit this paragraph and serialize the note.

        Raises:
            NoteValidationError: If the note breaks an invariant
        """
        return self._note_builder.add_paragraph(self._paragraph).build()

    async def publish(self) -> dict[str, Any]:
        """Commit this paragraph and publish the note."""
        return await self._note_builder.add_paragraph(self._paragraph).publish()


class NoteBuilder:
    """Root builder holding the committed paragraphs of a note.

    Attributes:
        client: HTTP client used by ``publish()``
    """

    def __init__(self, client: NoteClient, document: NoteDocument | None = None) -> None:
        self.client = client
        self._document = document if document is not None else NoteDocument()

    @property
    def document(self) -> NoteDocument:
        return self._document

    def _with_document(self, document: NoteDocument) -> Self:
        return type(self)(self.client, document)

    def add_paragraph(self, paragraph: Paragraph) -> Self:
        return self._with_document(self._document.with_paragraph(paragraph))

    def paragraph(self) -> ParagraphBuilder:
        return ParagraphBuilder(self)

    def build(self) -> dict[str, Any]:
        """Validate and serialize the note.

        Returns:
            Request body for the feed endpoint

        Raises:
            NoteValidationError: If the note breaks an invariant
        """
        return to_note_request(self._document)

    async def publish(self) -> dict[str, Any]:
        """Publish the note.

        Returns:
            Raw JSON response of the feed endpoint

        Raises:
            NoteValidationError: If the note breaks an invariant
            SubstackAPIError: If the request fails
        """
        request = self.build()
        logger.debug("Publishing note with %d paragraph(s)", len(self._document.paragraphs))
        return await self.client.post(FEED_PATH, json=request)


class NoteWithLinkBuilder(NoteBuilder):
    """Note builder that attaches a link preview when publishing.

    Publishing takes two requests: the link attachment is created first and
    the note is then published referencing its ID. If the second request
    fails, the attachment stays on the server; it is neither deleted nor
    retried.

    Attributes:
        link_url: URL the attachment is created for
    """

    def __init__(
        self,
        client: NoteClient,
        link_url: str,
        document: NoteDocument | None = None,
    ) -> None:
        super().__init__(client, document)
        self.link_url = link_url

    def _with_document(self, document: NoteDocument) -> Self:
        return type(self)(self.client, self.link_url, document)

    async def publish(self) -> dict[str, Any]:
        """Create the link attachment, then publish the note referencing it.

        Returns:
            Raw JSON response of the feed endpoint

        Raises:
            NoteValidationError: If the note breaks an invariant (no request is sent)
            SubstackAPIError: If either request fails
            httpx.HTTPError: If a request fails in transport
        """
        # Fail before creating an attachment that could never be used
        self.build()

        logger.debug("Creating link attachment for %s", self.link_url)
        response = await self.client.post(ATTACHMENT_PATH, json=build_attachment_request(self.link_url))
        attachment = parse_attachment_response(response)
        logger.info("Created link attachment %s", attachment.id)

        request = to_note_request(self._document.with_attachment_ids([attachment.id]))
        try:
            return await self.client.post(FEED_PATH, json=request)
        except Exception:
            logger.warning(
                "Publishing note failed; attachment %s was created but is not referenced by any note",
                attachment.id,
            )
            raise
