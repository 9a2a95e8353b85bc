"""Tests for the Web Server flow client orchestration."""

from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlparse

import pytest

from oauth2_webflow.models.config import WebServerClientConfig
from oauth2_webflow.models.errors import (
    AuthorizationCallbackError,
    AuthorizationDeniedError,
    OAuth2Error,
    RedirectUriRequiredError,
    StateValidationError,
)
from oauth2_webflow.models.tokens import TokenResponse
from oauth2_webflow.oauth_client import WebServerClient
from oauth2_webflow.services.tokens import OAuth2TokenManager


class TestWebServerClient:
    def setup_method(self):
        # Arrange
        self.config = WebServerClientConfig(
            client_id="client-123",
            client_secret="s3cret",
            authorization_server_url="https://auth.example.com/authorize",
            token_endpoint="https://auth.example.com/token",
            redirect_uri="https://myapp.com/callback",
            scope=["read", "write"],
        )
        self.token_manager = AsyncMock(spec=OAuth2TokenManager)
        self.token_manager.execute.return_value = TokenResponse(
            access_token="access-token-xyz"
        )
        self.client = WebServerClient(self.config, token_manager=self.token_manager)

    def test_authorization_url(self):
        # Act
        url = self.client.authorization_url(state="state-1", immediate=False)

        # Assert
        query_params = parse_qs(urlparse(url).query)
        assert query_params["type"] == ["web_server"]
        assert query_params["client_id"] == ["client-123"]
        assert query_params["scope"] == ["read write"]
        assert query_params["state"] == ["state-1"]
        assert query_params["immediate"] == ["false"]

    async def test_granted_callback_exchanges_code(self):
        # Act
        token_response = await self.client.handle_callback(
            "https://myapp.com/callback?code=ABC123&state=state-1",
            expected_state="state-1",
        )

        # Assert
        assert token_response.access_token == "access-token-xyz"
        self.token_manager.execute.assert_awaited_once()
        token_request = self.token_manager.execute.call_args[0][0]
        assert token_request.code == "ABC123"
        assert token_request.redirect_uri == "https://myapp.com/callback"
        assert token_request.grant_type == "web_server"

    async def test_denied_callback_raises_without_token_request(self):
        # Act & Assert
        with pytest.raises(AuthorizationDeniedError) as exc_info:
            await self.client.handle_callback(
                "https://myapp.com/callback?error=access_denied"
                "&error_description=User+said+no"
            )

        assert exc_info.value.error == "access_denied"
        assert exc_info.value.description == "User said no"
        self.token_manager.execute.assert_not_awaited()

    async def test_ambiguous_callback_raises(self):
        with pytest.raises(AuthorizationCallbackError):
            await self.client.handle_callback("https://myapp.com/callback?state=s")

        self.token_manager.execute.assert_not_awaited()

    async def test_state_mismatch_raises(self):
        with pytest.raises(StateValidationError):
            await self.client.handle_callback(
                "https://myapp.com/callback?code=ABC123&state=other",
                expected_state="state-1",
            )

        self.token_manager.execute.assert_not_awaited()

    async def test_token_endpoint_error_is_returned(self):
        self.token_manager.execute.return_value = TokenResponse(error="invalid_grant")

        token_response = await self.client.handle_callback(
            "https://myapp.com/callback?code=ABC123"
        )

        assert token_response.is_error()

    async def test_close_closes_token_manager(self):
        async with self.client:
            pass

        self.token_manager.close.assert_awaited_once()

    def test_default_token_manager_uses_config_timeout(self):
        client = WebServerClient(self.config.model_copy(update={"timeout": 5.0}))

        assert isinstance(client.token_manager, OAuth2TokenManager)
        assert client.token_manager.timeout == 5.0


class TestPerRequestRedirectUri:
    """Redirect URI supplied per request instead of in the config."""

    def setup_method(self):
        # Arrange
        self.config = WebServerClientConfig(
            client_id="client-123",
            authorization_server_url="https://auth.example.com/authorize",
            token_endpoint="https://auth.example.com/token",
        )
        self.token_manager = AsyncMock(spec=OAuth2TokenManager)
        self.token_manager.execute.return_value = TokenResponse(
            access_token="access-token-xyz"
        )
        self.client = WebServerClient(self.config, token_manager=self.token_manager)

    async def test_redirect_uri_flows_through_both_steps(self):
        # Arrange
        redirect_uri = "https://myapp.com/cb"

        # Act
        url = self.client.authorization_url(redirect_uri=redirect_uri)
        token_response = await self.client.handle_callback(
            "https://myapp.com/cb?code=ABC", redirect_uri=redirect_uri
        )

        # Assert
        assert parse_qs(urlparse(url).query)["redirect_uri"] == [redirect_uri]
        assert token_response.is_success()
        token_request = self.token_manager.execute.call_args[0][0]
        assert token_request.redirect_uri == redirect_uri

    async def test_missing_redirect_uri_raises_oauth_error(self):
        # Act & Assert
        with pytest.raises(RedirectUriRequiredError) as exc_info:
            await self.client.handle_callback("https://myapp.com/cb?code=ABC")

        assert isinstance(exc_info.value, OAuth2Error)
        self.token_manager.execute.assert_not_awaited()
