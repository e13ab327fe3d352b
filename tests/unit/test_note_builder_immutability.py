"""Unit tests for builder immutability and branching."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from substack_notes.note.builder import NoteBuilder
from substack_notes.note.document import Paragraph, TextSegment


def paragraph_texts(request: dict) -> list[list[str]]:
    """Return the texts of every top-level paragraph node."""
    return [
        [node["text"] for node in block["content"]]
        for block in request["bodyJson"]["content"]
        if block["type"] == "paragraph"
    ]


class TestImmutability:
    """Tests that builder calls never change an existing builder."""

    def test_methods_return_new_instances(self, note_client: AsyncMock) -> None:
        """Test that every content method returns a distinct builder."""
        note = NoteBuilder(note_client)
        paragraph = note.paragraph()
        with_text = paragraph.text("a")

        assert note.paragraph() is not paragraph
        assert with_text is not paragraph
        assert paragraph.content.segments == ()
        assert with_text.content.segments == (TextSegment(text="a"),)

    def test_shared_prefix_branches_independently(self, note_client: AsyncMock) -> None:
        """Test that two branches from one prefix do not affect each other or the prefix."""
        base = NoteBuilder(note_client).paragraph().text("shared ")
        branch_a = base.bold("A")
        branch_b = base.italic("B")

        assert paragraph_texts(branch_a.build()) == [["shared ", "A"]]
        assert paragraph_texts(branch_b.build()) == [["shared ", "B"]]
        assert paragraph_texts(base.build()) == [["shared "]]

    def test_building_does_not_commit_paragraph(self, note_client: AsyncMock) -> None:
        """Test that build() on a paragraph leaves the owning note unchanged."""
        note = NoteBuilder(note_client)
        paragraph = note.paragraph().text("x")

        paragraph.build()
        paragraph.build()

        assert note.document.paragraphs == ()
        assert paragraph_texts(paragraph.build()) == [["x"]]

    def test_new_paragraph_does_not_modify_original(self, note_client: AsyncMock) -> None:
        """Test that starting a new paragraph leaves the previous builder intact."""
        first = NoteBuilder(note_client).paragraph().text("first")
        first.paragraph().text("second")

        assert paragraph_texts(first.build()) == [["first"]]

    def test_branching_after_paragraphs(self, note_client: AsyncMock) -> None:
        """Test branching from a builder with committed paragraphs."""
        base = NoteBuilder(note_client).paragraph().text("one").paragraph()
        left = base.text("left")
        right = base.text("right").paragraph().text("extra")

        assert paragraph_texts(left.build()) == [["one"], ["left"]]
        assert paragraph_texts(right.build()) == [["one"], ["right"], ["extra"]]

    def test_list_builders_are_isolated(self, note_client: AsyncMock) -> None:
        """Test that list and list item builders branch without interference."""
        paragraph = NoteBuilder(note_client).paragraph().text("Intro")
        list_builder = paragraph.bullet_list()
        first_item = list_builder.item().text("one")

        short = first_item.finish()
        longer = first_item.item().text("two").finish()

        short_list = short.build()["bodyJson"]["content"][1]
        longer_list = longer.build()["bodyJson"]["content"][1]
        assert len(short_list["content"]) == 1
        assert len(longer_list["content"]) == 2
        assert list_builder.items == ()
        assert paragraph.content.lists == ()

    def test_finish_keeps_paragraph_segments(self, note_client: AsyncMock) -> None:
        """Test that finishing a list returns the paragraph as it was, plus the list."""
        paragraph = NoteBuilder(note_client).paragraph().text("a").bold("b")

        finished = paragraph.numbered_list().item().text("x").finish()

        assert finished.content.segments == paragraph.content.segments
        assert len(finished.content.lists) == 1

    def test_document_models_are_frozen(self) -> None:
        """Test that document values reject in-place mutation."""
        paragraph = Paragraph(segments=(TextSegment(text="x"),))

        with pytest.raises(ValidationError):
            paragraph.segments = ()  # type: ignore[misc]

    @pytest.mark.asyncio
    async def test_branches_publish_concurrently(self, note_client: AsyncMock) -> None:
        """Test that branches from one prefix can be published at the same time."""
        base = NoteBuilder(note_client).paragraph().text("shared ")

        await asyncio.gather(base.bold("A").publish(), base.italic("B").publish())

        sent = [call.kwargs["json"] for call in note_client.post.await_args_list]
        assert sorted(paragraph_texts(request)[0][1] for request in sent) == ["A", "B"]
