"""Exception hierarchy for OAuth 2.0 Web Server flow errors.

The flow builders themselves never raise. These exceptions come from the
opt-in strict checks, the token endpoint exchange, and the client
orchestration.
"""

from __future__ import annotations


class OAuth2Error(Exception):
    """Base exception for all OAuth 2.0 related errors."""

    pass


class AuthorizationCallbackError(OAuth2Error):
    """Raised when the authorization server callback can't be acted on.

    This indicates the authorization server sent an unusable callback URL,
    not that our callback handling code failed.
    """

    pass


class StateValidationError(AuthorizationCallbackError):
    """Raised when OAuth state parameter validation fails.

    This indicates either a missing state parameter or a state mismatch,
    which could indicate a CSRF attack or authorization server issue.
    """

    pass


class RedirectUriMismatchError(OAuth2Error):
    """Raised when the token request redirect URI differs from the authorization one."""

    pass


class RedirectUriRequiredError(OAuth2Error):
    """Raised when a token request is built with no redirect URI to send."""

    pass


class AuthorizationDeniedError(OAuth2Error):
    """Raised when the end user denies authorization."""

    def __init__(self, error: str, description: str | None = None):
        self.error = error
        self.description = description
        message = f"Authorization denied: {error}"
        if description:
            message = f"{message} - {description}"
        super().__init__(message)


class TokenError(OAuth2Error):
    """Raised when token operations fail."""

    pass


class TokenExchangeError(TokenError):
    """Raised when authorization code to token exchange fails."""

    pass
