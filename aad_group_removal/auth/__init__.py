"""
Authentication for the directory graph API.
"""

from .authentication import GraphAuthenticator
from .credentials import (
    BasicAuth,
    BearerSecret,
    Credential,
    OAuthClientCredentials,
    OAuthStaticToken,
    SECRET_NAMES,
    select_credential,
)

__all__ = [
    "GraphAuthenticator",
    "BasicAuth",
    "BearerSecret",
    "Credential",
    "OAuthClientCredentials",
    "OAuthStaticToken",
    "SECRET_NAMES",
    "select_credential",
]
