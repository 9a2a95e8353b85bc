"""OAuth 2.0 Web Server flow orchestration service.

Produces the three artifacts of the flow for a configured client: the
authorization URL, the parsed callback and the access token request. Each
call is independent; nothing about a previous step is remembered.
"""

from __future__ import annotations

import logging

from oauth2_webflow.models.config import WebServerClientConfig
from oauth2_webflow.models.errors import RedirectUriRequiredError
from oauth2_webflow.models.flow import AuthorizationResponse, AuthorizationUrl
from oauth2_webflow.models.tokens import AccessTokenRequest
from oauth2_webflow.services.security import validate_redirect_uri_match, validate_state

logger = logging.getLogger(__name__)


class WebServerFlowManager:
    """Builds Web Server flow artifacts from a client configuration.

    Handles:
    - Authorization URL construction with configured defaults
    - Callback URL parsing, with optional state validation
    - Access token request construction, with optional redirect URI validation

    The strict checks only run when the caller passes the value to compare
    against, since the manager keeps no record of earlier steps.
    """

    def __init__(self, config: WebServerClientConfig):
        self.config = config

    def build_authorization_url(
        self,
        state: str | None = None,
        immediate: bool | None = None,
        scope: str | None = None,
        redirect_uri: str | None = None,
    ) -> str:
        """Build the URL to redirect the end user to.

        Args:
            state: Opaque value echoed back in the callback
            immediate: Ask the server not to prompt the end user
            scope: Overrides the configured scope
            redirect_uri: Overrides the configured redirect URI

        Returns:
            Authorization URL for the user to visit
        """
        authorization_url = AuthorizationUrl(
            authorization_server_url=self.config.authorization_server_url,
            client_id=self.config.client_id,
            redirect_uri=(
                redirect_uri if redirect_uri is not None else self.config.redirect_uri
            ),
            state=state,
            scope=scope if scope is not None else self.config.scope,
            immediate=immediate,
        )
        url = authorization_url.build()

        logger.debug(f"Built authorization URL for client {self.config.client_id}")
        return url

    def parse_callback(
        self, callback_url: str, expected_state: str | None = None
    ) -> AuthorizationResponse:
        """Parse the redirect back from the authorization server.

        Args:
            callback_url: Full callback URL including its query string
            expected_state: When given, the callback state must match it

        Returns:
            AuthorizationResponse: Parsed callback response

        Raises:
            StateValidationError: If expected_state is given and doesn't match
        """
        auth_response = AuthorizationResponse.from_url(callback_url)

        if expected_state is not None:
            validate_state(expected_state, auth_response.state)

        if auth_response.is_granted():
            logger.info("Authorization callback received an authorization code")
        elif auth_response.is_denied():
            logger.warning(
                f"Authorization callback contained error: {auth_response.error}"
            )
        else:
            logger.warning("Authorization callback missing both code and error")

        return auth_response

    def build_access_token_request(
        self,
        code: str,
        redirect_uri: str | None = None,
        authorization_redirect_uri: str | None = None,
    ) -> AccessTokenRequest:
        """Build the request exchanging an authorization code for a token.

        Args:
            code: Authorization code from the callback
            redirect_uri: Overrides the configured redirect URI
            authorization_redirect_uri: When given, must equal the redirect URI used

        Returns:
            AccessTokenRequest ready for the token manager

        Raises:
            RedirectUriRequiredError: If no redirect URI is given or configured
            RedirectUriMismatchError: If the redirect URIs differ
        """
        if redirect_uri is None:
            redirect_uri = self.config.redirect_uri
        if redirect_uri is None:
            raise RedirectUriRequiredError(
                "Access token request requires a redirect_uri"
            )

        if authorization_redirect_uri is not None:
            validate_redirect_uri_match(authorization_redirect_uri, redirect_uri)

        logger.debug(f"Built access token request for {self.config.token_endpoint}")

        return AccessTokenRequest(
            credentials=self.config.client_credentials(),
            code=code,
            redirect_uri=redirect_uri,
        )
