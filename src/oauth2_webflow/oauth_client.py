"""OAuth 2.0 Web Server flow client for web request handlers.

Typical use inside a redirect URI handler:

    client = WebServerClient(config)
    response = AuthorizationResponse.from_url(full_request_url)
    if response.is_ambiguous():
        # no code yet: send the user to the authorization page
        return redirect(client.authorization_url(state=state))
    token = await client.handle_callback(full_request_url, expected_state=state)
    headers = token.get_auth_header()
"""

from __future__ import annotations

import logging

from oauth2_webflow.models.config import WebServerClientConfig
from oauth2_webflow.models.errors import AuthorizationCallbackError, AuthorizationDeniedError
from oauth2_webflow.models.tokens import TokenResponse
from oauth2_webflow.services.flow import WebServerFlowManager
from oauth2_webflow.services.tokens import OAuth2TokenManager

logger = logging.getLogger(__name__)


class WebServerClient:
    """Complete OAuth 2.0 Web Server flow client.

    Composes the flow manager and the token manager: build the redirect,
    then turn the callback into an access token.
    """

    def __init__(
        self,
        config: WebServerClientConfig,
        token_manager: OAuth2TokenManager | None = None,
    ):
        """Initialize the client.

        Args:
            config: Registered client settings and endpoints
            token_manager: Token endpoint service, created from config if omitted
        """
        self.config = config
        self.flow_manager = WebServerFlowManager(config)
        self.token_manager = token_manager or OAuth2TokenManager(
            timeout=config.timeout
        )

    def authorization_url(
        self,
        state: str | None = None,
        immediate: bool | None = None,
        redirect_uri: str | None = None,
    ) -> str:
        """Authorization page URL for the end user.

        ``redirect_uri`` overrides the configured one, e.g. with the URL of the
        current request. Pass the same value to :meth:`handle_callback`.
        """
        return self.flow_manager.build_authorization_url(
            state=state, immediate=immediate, redirect_uri=redirect_uri
        )

    async def handle_callback(
        self,
        callback_url: str,
        expected_state: str | None = None,
        redirect_uri: str | None = None,
    ) -> TokenResponse:
        """Exchange the code in an authorization callback for an access token.

        Args:
            callback_url: Full callback URL received at the redirect URI
            expected_state: State sent with the authorization URL, if any
            redirect_uri: Redirect URI used for the authorization URL, if not configured

        Returns:
            TokenResponse: Token endpoint response (success or error)

        Raises:
            AuthorizationDeniedError: If the end user denied access
            AuthorizationCallbackError: If the callback has neither code nor error
            StateValidationError: If expected_state doesn't match
            RedirectUriRequiredError: If no redirect URI is given or configured
            TokenError: If the token endpoint can't be reached or parsed
        """
        auth_response = self.flow_manager.parse_callback(callback_url, expected_state)

        if auth_response.is_denied():
            raise AuthorizationDeniedError(
                auth_response.error, auth_response.error_description
            )
        if auth_response.is_ambiguous():
            raise AuthorizationCallbackError(
                "Authorization callback missing both code and error"
            )

        token_request = self.flow_manager.build_access_token_request(
            auth_response.code, redirect_uri=redirect_uri
        )
        token_response = await self.token_manager.execute(token_request)

        if token_response.is_success():
            logger.info(f"Obtained access token for client {self.config.client_id}")
        return token_response

    async def close(self) -> None:
        """Close the token endpoint connection."""
        await self.token_manager.close()

    async def __aenter__(self) -> WebServerClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
