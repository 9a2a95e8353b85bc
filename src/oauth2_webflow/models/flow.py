"""Authorization flow models for the OAuth 2.0 Web Server flow.

Contains the authorization URL the end user is sent to and the parsed
redirect the authorization server sends them back with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from oauth2_webflow.primitives.query import append_query, parse_query, to_query_params

WEB_SERVER_TYPE = "web_server"


@dataclass(frozen=True)
class AuthorizationUrl:
    """URL builder for the end-user authorization page.

    The most commonly set fields are ``client_id`` and ``redirect_uri``, and
    possibly ``scope``. After the end user grants or denies the request they
    are redirected to ``redirect_uri`` with query parameters set by the
    authorization server; use :class:`AuthorizationResponse` to parse it.

    Nothing is validated here. A missing required field produces a URL
    without that parameter and the authorization server decides what to do.
    """

    type: ClassVar[str] = WEB_SERVER_TYPE

    authorization_server_url: str
    client_id: str | None = None
    # Required unless registered out-of-band. Servers may reject a query component.
    redirect_uri: str | None = None
    state: str | None = None
    scope: str | None = None  # space-delimited
    # True asks the server not to prompt the end user. Absent means false server-side.
    immediate: bool | None = None

    def to_query_params(self) -> dict[str, str]:
        """Serialize the set fields under their wire names."""
        return to_query_params(
            {
                "type": self.type,
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "state": self.state,
                "scope": self.scope,
                "immediate": self.immediate,
            }
        )

    def build(self) -> str:
        """Build the complete authorization URL."""
        return append_query(self.authorization_server_url, self.to_query_params())


@dataclass(frozen=True)
class AuthorizationResponse:
    """Redirect URL parameters after the end user grants or denies access.

    ``error`` is set when the end user denied authorization, in which case
    ``code`` is always ``None``. ``state`` echoes the request's state; checking
    it against what was sent is up to the caller.
    """

    code: str | None = None
    state: str | None = None
    error: str | None = None
    error_description: str | None = None
    error_uri: str | None = None

    @classmethod
    def from_url(cls, callback_url: str) -> AuthorizationResponse:
        """Parse the full redirect URL received at the redirect URI endpoint."""
        params = parse_query(callback_url)
        error = params.get("error")

        return cls(
            code=None if error is not None else params.get("code"),
            state=params.get("state"),
            error=error,
            error_description=params.get("error_description"),
            error_uri=params.get("error_uri"),
        )

    def is_denied(self) -> bool:
        return self.error is not None

    def is_granted(self) -> bool:
        return self.error is None and self.code is not None

    def is_ambiguous(self) -> bool:
        """Neither a code nor an error: the callback can't be acted on."""
        return self.error is None and self.code is None
