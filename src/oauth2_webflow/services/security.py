"""Security utilities for OAuth 2.0 Web Server flows.

Provides state parameter generation plus the optional strict checks a caller
can run between flow steps. None of these run unless asked for.
"""

from __future__ import annotations

import secrets
import string

from oauth2_webflow.models.errors import RedirectUriMismatchError, StateValidationError


def generate_state() -> str:
    """Generate cryptographically secure state parameter.

    The state parameter provides CSRF protection by ensuring the callback
    matches the original authorization request.

    Returns:
        Cryptographically secure random state string (32 characters)
    """
    alphabet = string.ascii_letters + string.digits + "-._~"
    return "".join(secrets.choice(alphabet) for _ in range(32))


def validate_state(expected: str, actual: str | None) -> None:
    """Validate state parameter matches expected value.

    Args:
        expected: State parameter from original authorization request
        actual: State parameter from callback URL

    Raises:
        StateValidationError: If state is missing or doesn't match
    """
    if actual is None:
        raise StateValidationError(
            "Authorization server callback missing required state parameter"
        )
    if not secrets.compare_digest(expected.encode(), actual.encode()):
        raise StateValidationError("State parameter mismatch - possible CSRF attack")


def validate_redirect_uri_match(
    authorization_redirect_uri: str, token_redirect_uri: str
) -> None:
    """Validate the token request reuses the authorization redirect URI.

    The comparison is exact; no normalization is applied.

    Raises:
        RedirectUriMismatchError: If the two URIs differ
    """
    if authorization_redirect_uri != token_redirect_uri:
        raise RedirectUriMismatchError(
            f"Token request redirect_uri {token_redirect_uri!r} does not match "
            f"authorization redirect_uri {authorization_redirect_uri!r}"
        )
