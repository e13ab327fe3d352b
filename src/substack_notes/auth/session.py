"""Session management with keyring storage.

Provides secure storage of the Substack token using the system keyring.
Includes diagnostic information when keyring is not available.
"""

from __future__ import annotations

import json
import logging
import platform
import time

import keyring
from keyring.errors import KeyringError as BackendKeyringError
from keyring.errors import PasswordDeleteError

from substack_notes.config import get_api_key, get_hostname
from substack_notes.models import Session

logger = logging.getLogger(__name__)


class KeyringError(Exception):
    """Exception raised when keyring operations fail.

    Includes diagnostic information to help users troubleshoot
    keyring configuration issues.

    Attributes:
        message: Human-readable error message
        os_info: Operating system information
        backend_info: Keyring backend information
        setup_instructions: Steps to configure keyring
    """

    def __init__(
        self,
        message: str,
        os_info: str,
        backend_info: str | None = None,
        setup_instructions: list[str] | None = None,
    ) -> None:
        self.message = message
        self.os_info = os_info
        self.backend_info = backend_info
        self.setup_instructions = setup_instructions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with diagnostic information."""
        parts = [self.message, f"\nOS: {self.os_info}"]
        if self.backend_info:
            parts.append(f"Backend: {self.backend_info}")
        if self.setup_instructions:
            parts.append("\nSetup instructions:")
            parts.extend(f"  - {instruction}" for instruction in self.setup_instructions)
        return "\n".join(parts)


def _get_os_info() -> str:
    return f"{platform.system()} {platform.release()}"


def _get_backend_info() -> str | None:
    try:
        return type(keyring.get_keyring()).__name__
    except BackendKeyringError:
        return None


def _get_setup_instructions() -> list[str]:
    """Get setup instructions based on the current platform."""
    system = platform.system()

    if system == "Linux":
        return [
            "Install a keyring backend: sudo apt-get install gnome-keyring",
            "For headless servers, consider using keyrings.alt: pip install keyrings.alt",
            "Or set SUBSTACK_API_KEY instead of storing a session",
        ]
    if system == "Darwin":
        return [
            "macOS should use Keychain automatically",
            "If issues persist, try: security unlock-keychain",
        ]
    if system == "Windows":
        return [
            "Windows should use Windows Credential Locker automatically",
            "If issues persist, check Windows Credential Manager",
        ]
    return [
        "Install a compatible keyring backend",
        "See: https://pypi.org/project/keyring/",
    ]


def _keyring_error(action: str, error: Exception) -> KeyringError:
    return KeyringError(
        message=f"Failed to {action} session in keyring: {error}",
        os_info=_get_os_info(),
        backend_info=_get_backend_info(),
        setup_instructions=_get_setup_instructions(),
    )


class SessionManager:
    """Manages session storage using keyring.

    Attributes:
        service_name: The keyring service name used for storage
    """

    DEFAULT_SERVICE_NAME = "substack-notes"
    SESSION_KEY = "session"

    def __init__(self, service_name: str | None = None) -> None:
        self.service_name = service_name or self.DEFAULT_SERVICE_NAME

    def save(self, session: Session) -> None:
        """Save session to keyring.

        Raises:
            KeyringError: If keyring operation fails
        """
        try:
            keyring.set_password(self.service_name, self.SESSION_KEY, json.dumps(session.model_dump()))
        except BackendKeyringError as e:
            raise _keyring_error("save", e) from e

    def load(self) -> Session | None:
        """Load session from keyring.

        Returns:
            Session object if found and valid, None otherwise

        Raises:
            KeyringError: If keyring operation fails (not including missing session)
        """
        try:
            session_json = keyring.get_password(self.service_name, self.SESSION_KEY)
        except BackendKeyringError as e:
            raise _keyring_error("load", e) from e

        if session_json is None:
            return None

        try:
            return Session(**json.loads(session_json))
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.warning("Stored session is invalid and was ignored")
            return None

    def load_or_env(self) -> Session | None:
        """Load the stored session, falling back to SUBSTACK_API_KEY.

        Returns:
            Stored session, a session built from the environment, or None
        """
        session = self.load()
        if session is not None:
            return session

        token = get_api_key()
        if token is None:
            return None
        return Session(token=token, hostname=get_hostname(), created_at=int(time.time()))

    def clear(self) -> None:
        """Clear session from keyring.

        Does not raise an error if no session exists.

        Raises:
            KeyringError: If keyring operation fails
        """
        try:
            keyring.delete_password(self.service_name, self.SESSION_KEY)
        except PasswordDeleteError:
            # Session didn't exist, which is fine
            pass
        except BackendKeyringError as e:
            raise _keyring_error("clear", e) from e

    def has_session(self) -> bool:
        """Check if a session exists in keyring."""
        try:
            return keyring.get_password(self.service_name, self.SESSION_KEY) is not None
        except BackendKeyringError:
            return False
