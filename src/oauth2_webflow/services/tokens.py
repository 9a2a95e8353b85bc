"""OAuth 2.0 token endpoint service.

Executes access token requests built by the Web Server flow and parses the
token endpoint response.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from oauth2_webflow.models.errors import TokenError, TokenExchangeError
from oauth2_webflow.models.tokens import AccessTokenRequest, TokenResponse

logger = logging.getLogger(__name__)


class OAuth2TokenManager:
    """Sends access token requests to the token endpoint.

    Uses application/x-www-form-urlencoded encoding for the request body.
    Both success and error responses are returned as TokenResponse; only
    transport failures and unparseable bodies raise.
    """

    def __init__(self, timeout: float = 30.0):
        """Initialize OAuth token manager.

        Args:
            timeout: HTTP request timeout in seconds
        """
        self.timeout = timeout
        self._http_client = httpx.AsyncClient(timeout=timeout)

    async def execute(self, token_request: AccessTokenRequest) -> TokenResponse:
        """Exchange an authorization code for an access token.

        Args:
            token_request: Access token request parameters

        Returns:
            TokenResponse: Token response (success or error)

        Raises:
            TokenError: If token exchange fails due to network/parsing issues
        """
        logger.debug(f"Exchanging authorization code at {token_request.token_endpoint}")

        try:
            headers = {
                "Content-Type": "application/x-www-form-urlencoded",
                "Accept": "application/json",
            }

            form_data = token_request.to_form_data()

            # Log request details (without sensitive data)
            logger.debug(
                f"Token request: grant_type={form_data['grant_type']}, "
                f"client_id={form_data['client_id']}"
            )

            response = await self._http_client.post(
                token_request.token_endpoint,
                data=form_data,
                headers=headers,
            )

            return self._parse_token_response(response)

        except TokenError:
            raise
        except httpx.HTTPError as e:
            raise TokenExchangeError(f"HTTP error during token exchange: {e}") from e
        except Exception as e:
            raise TokenExchangeError(
                f"Unexpected error during token exchange: {e}"
            ) from e

    def _parse_token_response(self, response: httpx.Response) -> TokenResponse:
        """Parse token endpoint response into TokenResponse.

        Args:
            response: HTTP response from token endpoint

        Returns:
            TokenResponse: Parsed response (success or error)

        Raises:
            TokenError: If response cannot be parsed
        """
        try:
            response_data = response.json()
        except ValueError as e:
            raise TokenError(f"Invalid token response format: {e}") from e

        if not isinstance(response_data, dict):
            raise TokenError("Token response body must be a JSON object")

        if response.status_code == 200:
            if "access_token" not in response_data:
                raise TokenError("Token response missing required access_token")
            logger.info("Token exchange successful")
        else:
            error_code = response_data.get("error", "unknown_error")
            error_description = response_data.get(
                "error_description", "No description provided"
            )
            logger.warning(
                f"Token exchange failed with {response.status_code}: "
                f"{error_code} - {error_description}"
            )
            response_data.setdefault("error", error_code)

        try:
            return TokenResponse(**response_data)
        except ValidationError as e:
            raise TokenError(f"Invalid token response format: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._http_client.aclose()

    async def __aenter__(self) -> OAuth2TokenManager:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
