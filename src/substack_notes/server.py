"""FastMCP server for publishing Substack notes.

Provides MCP tools for authenticating and publishing notes.
"""

from __future__ import annotations

import time
from typing import Annotated

from fastmcp import FastMCP

from substack_notes.api.notes import check_connectivity, publish_text_note
from substack_notes.auth.session import KeyringError, SessionManager
from substack_notes.config import get_hostname
from substack_notes.decorators import handle_api_error, require_session
from substack_notes.models import Session
from substack_notes.utils.logging import get_logger

logger = get_logger("server")

mcp = FastMCP("substack-notes")

_session_manager = SessionManager()


@mcp.tool()
async def substack_login(
    token: Annotated[str, "Value of the substack.sid cookie from a logged-in browser."],
    hostname: Annotated[str | None, "Publication hostname. Defaults to SUBSTACK_HOSTNAME or substack.com."] = None,
) -> str:
    """Store a Substack session.

    Returns:
        Login result message
    """
    token = token.strip()
    if not token:
        return "A token is required."

    session = Session(token=token, hostname=hostname or get_hostname(), created_at=int(time.time()))
    _session_manager.save(session)
    logger.info("Stored session for %s", session.hostname)
    return f"Session stored for {session.hostname}."


@mcp.tool()
async def substack_check_auth() -> str:
    """Report whether a usable session is available."""
    session = _session_manager.load_or_env()
    if session is None:
        return "Not authenticated. Use substack_login or set SUBSTACK_API_KEY."
    if session.is_expired():
        return "Session has expired. Use substack_login again."
    return f"Authenticated for {session.hostname}."


@mcp.tool()
async def substack_logout() -> str:
    """Remove the stored session."""
    try:
        _session_manager.clear()
    except KeyringError as e:
        logger.error("Failed to clear session: %s", e.message)
        return f"Logout failed: {e}"
    return "Logged out."


@handle_api_error
@require_session
async def _publish_note(session: Session, text: str, link_url: str | None) -> str:
    response = await publish_text_note(session, text, link_url)
    return f"Note published. ID: {response.get('id')}"


@handle_api_error
@require_session
async def _check_connectivity(session: Session) -> str:
    if await check_connectivity(session):
        return f"Connected to {session.hostname}."
    return f"Could not reach {session.hostname} with the current session."


@mcp.tool()
async def substack_publish_note(
    text: Annotated[str, "Note text. Blank lines separate paragraphs."],
    link_url: Annotated[str | None, "URL to attach as a link preview."] = None,
) -> str:
    """Publish a plain-text note to the feed.

    When link_url is given, a link preview attachment is created first and
    the note is published referencing it.

    Returns:
        Result message including the new note ID
    """
    return await _publish_note(text, link_url)


@mcp.tool()
async def substack_check_connectivity() -> str:
    """Check whether the API accepts the current session."""
    return await _check_connectivity()
