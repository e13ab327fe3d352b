"""Pydantic data models for substack-notes.

This module defines the session, API response and error types shared by the
HTTP client, the note builders and the tool server.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_HOSTNAME = "substack.com"


class Session(BaseModel):
    """User authentication session.

    Attributes:
        token: Value of the ``substack.sid`` authentication cookie
        hostname: Publication hostname requests are sent to
        user_id: Substack user ID, if known
        created_at: Session creation timestamp (Unix timestamp)
        expires_at: Session expiration timestamp (Unix timestamp), None if no expiry
    """

    token: str
    hostname: str = DEFAULT_HOSTNAME
    user_id: int | None = None
    created_at: int
    expires_at: int | None = None

    def is_expired(self) -> bool:
        """Check if the session has expired.

        Returns:
            True if session has expired, False otherwise.
            Returns False if expires_at is None (no expiry set).
        """
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at


class CreateAttachmentResponse(BaseModel):
    """Response of ``POST /api/v1/comment/attachment``.

    Only ``id`` is relied upon; the remaining fields are kept for callers.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    type: str | None = None
    publication: Any = None
    post: Any = None


class ErrorCode(str, Enum):
    """Error codes for substack-notes API errors."""

    NOT_AUTHENTICATED = "not_authenticated"
    SESSION_EXPIRED = "session_expired"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    API_ERROR = "api_error"
    INVALID_INPUT = "invalid_input"


class SubstackAPIError(Exception):
    """Exception for Substack API errors.

    Attributes:
        code: Error code
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            details: Additional context (e.g., status code, response body)
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NoteValidationError(ValueError):
    """Raised when a note cannot be serialized.

    Covers empty notes, empty paragraphs and link segments without a URL.
    Always raised before any network request is made.
    """


def parse_attachment_response(data: dict[str, Any]) -> CreateAttachmentResponse:
    """Create a CreateAttachmentResponse from the raw API response.

    Args:
        data: Raw API response dictionary

    Returns:
        CreateAttachmentResponse instance

    Raises:
        SubstackAPIError: If the required ``id`` field is missing
    """
    attachment_id = data.get("id")
    if not attachment_id:
        raise SubstackAPIError(
            code=ErrorCode.API_ERROR,
            message="Attachment response missing required field: id",
            details={"response": data},
        )
    return CreateAttachmentResponse.model_validate({**data, "id": str(attachment_id)})
