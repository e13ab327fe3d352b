"""Decorators for MCP tool handlers.

Provides common functionality for MCP tool handlers:
- Session validation
- API and validation error handling

Decorator Order:
    When combining decorators, apply in this order (outermost first):

        @handle_api_error   # Catches SubstackAPIError from the inner function
        @require_session    # Validates session before calling handler
        async def handler(session: Session, ...) -> str:
            ...
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TYPE_CHECKING, Concatenate

from substack_notes.auth.session import SessionManager
from substack_notes.models import NoteValidationError, SubstackAPIError

if TYPE_CHECKING:
    from substack_notes.models import Session

logger = logging.getLogger(__name__)

_session_manager = SessionManager()

NO_SESSION_MESSAGE = "No valid session. Use substack_login or set SUBSTACK_API_KEY."


def require_session[**P](
    func: Callable[Concatenate[Session, P], Awaitable[str]],
) -> Callable[P, Awaitable[str]]:
    """Decorator to validate session before executing handler.

    Loads the stored session (or one built from SUBSTACK_API_KEY) and passes
    it as the first argument. Returns an error message instead when no valid
    session is available.
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> str:
        session = _session_manager.load_or_env()
        if session is None or session.is_expired():
            return NO_SESSION_MESSAGE
        return await func(session, *args, **kwargs)

    return wrapper


def handle_api_error[**P](
    func: Callable[P, Awaitable[str]],
) -> Callable[P, Awaitable[str]]:
    """Decorator to format SubstackAPIError and NoteValidationError as messages.

    Other exceptions are propagated.
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> str:
        try:
            return await func(*args, **kwargs)
        except SubstackAPIError as e:
            logger.error(
                "SubstackAPIError in %s: code=%s, message=%s",
                func.__name__,
                e.code.value,
                e.message,
                exc_info=True,
            )
            return f"Error [{e.code.value}]: {e.message}"
        except NoteValidationError as e:
            logger.info("Invalid note in %s: %s", func.__name__, e)
            return f"Invalid note: {e}"

    return wrapper
