"""Response factories shared by the unit tests."""

from __future__ import annotations

from typing import Any


def create_attachment_response(attachment_id: str = "19b5d6f9-46db-47d6-b381-17cb5f443c00") -> dict[str, Any]:
    """Create a mock response of the attachment endpoint."""
    return {"id": attachment_id, "type": "post", "publication": {}, "post": {}}


def create_publish_response(note_id: int = 67890, attachments: list[Any] | None = None) -> dict[str, Any]:
    """Create a mock response of the feed endpoint."""
    return {
        "id": note_id,
        "user_id": 12345,
        "body": "Test note",
        "type": "feed",
        "status": "published",
        "reply_minimum_role": "everyone",
        "attachments": attachments or [],
    }
