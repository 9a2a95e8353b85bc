"""Client configuration for the OAuth 2.0 Web Server flow."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from oauth2_webflow.models.tokens import ClientCredentials


class WebServerClientConfig(BaseModel):
    """Registered client settings and authorization server endpoints."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str | None = None  # None for public clients
    authorization_server_url: str
    token_endpoint: str

    # Optional defaults for the authorization request
    redirect_uri: str | None = None
    scope: str | None = None

    timeout: float = Field(default=30.0, gt=0)

    @field_validator("authorization_server_url", "token_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoints must be absolute http(s) URLs."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Endpoint must be an absolute http(s) URL: {v}")
        return v

    @field_validator("scope", mode="before")
    @classmethod
    def join_scope(cls, v: object) -> object:
        """Accept scope tokens as a list and join them with spaces."""
        if isinstance(v, (list, tuple)):
            return " ".join(v)
        return v

    def client_credentials(self) -> ClientCredentials:
        """Token request credentials for this client."""
        return ClientCredentials(
            token_endpoint=self.token_endpoint,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )
