"""
Authentication handling for the directory graph API.
Turns the selected credential into a single Authorization header value,
fetching an OAuth 2.0 token via the client credentials flow when needed.
"""

import base64
import logging
from typing import Dict

import aiohttp

from ..errors import ConfigurationError, TokenExchangeError
from .credentials import (
    BasicAuth,
    BearerSecret,
    Credential,
    OAuthClientCredentials,
    OAuthStaticToken,
)

logger = logging.getLogger(__name__)


def _bearer(token: str) -> str:
    if token.startswith("Bearer "):
        return token
    return f"Bearer {token}"


def _basic(username: str, password: str) -> str:
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {encoded}"


class GraphAuthenticator:
    """Resolves authorization headers for graph API requests."""

    def __init__(self, session: aiohttp.ClientSession):
        self.session = session

    async def fetch_client_credentials_token(self, credential: OAuthClientCredentials) -> str:
        """Fetch an OAuth 2.0 access token using the client credentials flow."""
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
        data: Dict[str, str] = {"grant_type": "client_credentials"}
        if credential.scope:
            data["scope"] = credential.scope
        if credential.audience:
            data["audience"] = credential.audience

        if credential.credentials_in_params:
            data["client_id"] = credential.client_id
            data["client_secret"] = credential.client_secret
        else:
            headers["Authorization"] = _basic(credential.client_id, credential.client_secret)

        async with self.session.post(credential.token_url, headers=headers, data=data) as response:
            logger.info("OAuth2 token request -> Status: %s", response.status)
            if not 200 <= response.status < 300:
                error_text = await response.text()
                raise TokenExchangeError(
                    f"OAuth2 token request failed: {response.status} {response.reason} - {error_text}",
                    status=response.status,
                    reason=response.reason,
                )
            token_data = await response.json()

        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            raise TokenExchangeError("No access_token in OAuth2 token response")
        return access_token

    async def authorization_header(self, credential: Credential) -> str:
        """Render the Authorization header value for any supported credential."""
        if isinstance(credential, BearerSecret):
            logger.info("[OK] Using Bearer token authentication")
            return _bearer(credential.token)

        if isinstance(credential, BasicAuth):
            logger.info("[OK] Using Basic authentication")
            return _basic(credential.username, credential.password)

        if isinstance(credential, OAuthStaticToken):
            logger.info("[OK] Using OAuth2 authorization code access token")
            return _bearer(credential.access_token)

        if isinstance(credential, OAuthClientCredentials):
            logger.info("[INFO] Fetching OAuth2 client credentials token...")
            access_token = await self.fetch_client_credentials_token(credential)
            logger.info("[OK] Using OAuth2 client credentials Bearer token")
            return _bearer(access_token)

        raise ConfigurationError(f"Unsupported credential type: {type(credential).__name__}")
