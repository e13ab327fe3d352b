"""Configuration utilities.

Reads client settings from environment variables.
"""

import os

from substack_notes.models import DEFAULT_HOSTNAME

# Environment variable names
HOSTNAME_ENV_VAR = "SUBSTACK_HOSTNAME"
API_KEY_ENV_VAR = "SUBSTACK_API_KEY"
MAX_REQUESTS_ENV_VAR = "SUBSTACK_MAX_REQUESTS_PER_SECOND"
TIMEOUT_ENV_VAR = "SUBSTACK_TIMEOUT"

DEFAULT_MAX_REQUESTS_PER_SECOND = 25
DEFAULT_TIMEOUT = 30.0


def get_hostname() -> str:
    """Get the publication hostname from SUBSTACK_HOSTNAME.

    Returns:
        Hostname without scheme (default: substack.com)
    """
    return os.environ.get(HOSTNAME_ENV_VAR, "").strip() or DEFAULT_HOSTNAME


def get_api_key() -> str | None:
    """Get the API token from SUBSTACK_API_KEY.

    Returns:
        The token, or None when unset or blank
    """
    value = os.environ.get(API_KEY_ENV_VAR, "").strip()
    return value or None


def get_max_requests_per_second() -> int:
    """Get the client-side rate limit from SUBSTACK_MAX_REQUESTS_PER_SECOND.

    Invalid or non-positive values fall back to the default.

    Returns:
        Maximum number of requests per one-second window
    """
    raw = os.environ.get(MAX_REQUESTS_ENV_VAR)
    if raw is None:
        return DEFAULT_MAX_REQUESTS_PER_SECOND
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_REQUESTS_PER_SECOND
    return value if value > 0 else DEFAULT_MAX_REQUESTS_PER_SECOND


def get_timeout() -> float:
    """Get the request timeout in seconds from SUBSTACK_TIMEOUT."""
    raw = os.environ.get(TIMEOUT_ENV_VAR)
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT
