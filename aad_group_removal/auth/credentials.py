"""
Credential variants supported by the action and the selection rule that
picks exactly one of them from the job's environment and secrets.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from ..errors import ConfigurationError

# Secret names
BEARER_AUTH_TOKEN = "BEARER_AUTH_TOKEN"
BASIC_USERNAME = "BASIC_USERNAME"
BASIC_PASSWORD = "BASIC_PASSWORD"
OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN = "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN"
OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET"

SECRET_NAMES = (
    BEARER_AUTH_TOKEN,
    BASIC_USERNAME,
    BASIC_PASSWORD,
    OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN,
    OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET,
)

# Environment names for the client credentials flow
OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL = "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL"
OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID"
OAUTH2_CLIENT_CREDENTIALS_SCOPE = "OAUTH2_CLIENT_CREDENTIALS_SCOPE"
OAUTH2_CLIENT_CREDENTIALS_AUDIENCE = "OAUTH2_CLIENT_CREDENTIALS_AUDIENCE"
OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE = "OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE"

AUTH_STYLE_IN_PARAMS = "InParams"
AUTH_STYLE_IN_HEADER = "InHeader"

SUPPORTED_METHODS = (
    "Bearer token (BEARER_AUTH_TOKEN)",
    "Basic auth (BASIC_USERNAME and BASIC_PASSWORD)",
    "OAuth2 authorization code (OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN)",
    "OAuth2 client credentials (OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET)",
)


@dataclass(frozen=True)
class BearerSecret:
    token: str = field(repr=False)


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class OAuthStaticToken:
    access_token: str = field(repr=False)


@dataclass(frozen=True)
class OAuthClientCredentials:
    token_url: str
    client_id: str
    client_secret: str = field(repr=False)
    scope: Optional[str] = None
    audience: Optional[str] = None
    auth_style: str = AUTH_STYLE_IN_HEADER

    @property
    def credentials_in_params(self) -> bool:
        return (self.auth_style or "").lower() == AUTH_STYLE_IN_PARAMS.lower()


Credential = Union[BearerSecret, BasicAuth, OAuthStaticToken, OAuthClientCredentials]


def _client_credentials_from(environment: Mapping[str, str], client_secret: str) -> OAuthClientCredentials:
    token_url = environment.get(OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL)
    if not token_url:
        raise ConfigurationError(
            f"{OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL} environment variable is required for OAuth2 client credentials"
        )
    client_id = environment.get(OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID)
    if not client_id:
        raise ConfigurationError(
            f"{OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID} environment variable is required for OAuth2 client credentials"
        )
    return OAuthClientCredentials(
        token_url=token_url,
        client_id=client_id,
        client_secret=client_secret,
        scope=environment.get(OAUTH2_CLIENT_CREDENTIALS_SCOPE) or None,
        audience=environment.get(OAUTH2_CLIENT_CREDENTIALS_AUDIENCE) or None,
        auth_style=environment.get(OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE) or AUTH_STYLE_IN_HEADER,
    )


def select_credential(environment: Mapping[str, str], secrets: Mapping[str, str]) -> Credential:
    """
    Pick the credential to use for this invocation.

    Priority: bearer secret, basic username/password, pre-issued OAuth2
    access token, OAuth2 client credentials. The first satisfied scheme wins
    even when several are configured.
    """
    if secrets.get(BEARER_AUTH_TOKEN):
        return BearerSecret(secrets[BEARER_AUTH_TOKEN])

    if secrets.get(BASIC_USERNAME) and secrets.get(BASIC_PASSWORD):
        return BasicAuth(secrets[BASIC_USERNAME], secrets[BASIC_PASSWORD])

    if secrets.get(OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN):
        return OAuthStaticToken(secrets[OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN])

    if secrets.get(OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET):
        return _client_credentials_from(environment, secrets[OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET])

    raise ConfigurationError(
        "No supported authentication method configured. Supported methods: " + "; ".join(SUPPORTED_METHODS)
    )
