"""Token request and response models for the OAuth 2.0 Web Server flow.

Contains the access token request built from a granted authorization code
and the token endpoint response it produces.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from oauth2_webflow.models.flow import WEB_SERVER_TYPE
from oauth2_webflow.primitives.query import to_query_params


@dataclass(frozen=True)
class ClientCredentials:
    """Token endpoint and client authentication shared by token requests."""

    token_endpoint: str
    client_id: str
    client_secret: str | None = None  # None for public clients

    def to_form_data(self) -> dict[str, str]:
        return to_query_params(
            {"client_id": self.client_id, "client_secret": self.client_secret}
        )


@dataclass(frozen=True)
class AccessTokenRequest:
    """Access token request for a user-granted authorization code.

    Immutable request parameters. ``redirect_uri`` must be the exact value
    used to build the authorization URL; servers reject any mismatch.
    Hand the request to ``OAuth2TokenManager.execute`` to send it.
    """

    grant_type: ClassVar[str] = WEB_SERVER_TYPE

    credentials: ClientCredentials
    code: str
    redirect_uri: str

    @property
    def token_endpoint(self) -> str:
        return self.credentials.token_endpoint

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request.

        Returns:
            Dictionary suitable for httpx data parameter
        """
        data = to_query_params(
            {
                "grant_type": self.grant_type,
                "code": self.code,
                "redirect_uri": self.redirect_uri,
            }
        )
        data.update(self.credentials.to_form_data())
        return data


class TokenResponse(BaseModel):
    """Token endpoint response.

    Represents both successful responses and error responses. Fields the
    server adds beyond the standard ones are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    # Success response fields
    access_token: str | None = None
    token_type: str = "Bearer"
    expires_in: int | None = None  # Seconds until expiry
    refresh_token: str | None = None
    scope: str | None = None

    # Error response fields
    error: str | None = None
    error_description: str | None = None
    error_uri: str | None = None

    def is_success(self) -> bool:
        """Check if token response indicates success."""
        return self.error is None and self.access_token is not None

    def is_error(self) -> bool:
        """Check if token response indicates an error."""
        return self.error is not None

    def calculate_expires_at(self) -> float | None:
        """Calculate absolute expiry timestamp from expires_in.

        Returns:
            Unix timestamp when token expires, or None if no expiry
        """
        if self.expires_in is None:
            return None
        return time.time() + self.expires_in

    def get_auth_header(self) -> dict[str, str]:
        """Authorization header for requests made with this token.

        Raises:
            ValueError: If response is not successful
        """
        if not self.is_success():
            raise ValueError("Cannot authorize with an error response")
        return {"Authorization": f"{self.token_type} {self.access_token}"}
