"""Authenticators and the dispatcher that picks one for a credential."""

from mongocred.authenticators.base import (
    Authenticator,
    PasswordAuthenticator,
    UsernamePasswordCredential,
)
from mongocred.authenticators.dispatch import dispatch, stringify_properties
from mongocred.authenticators.external import (
    GssapiAuthenticator,
    MongoAWSAuthenticator,
    MongoDBX509Authenticator,
)
from mongocred.authenticators.password import (
    DEFAULT_CANDIDATES,
    DefaultAuthenticator,
    MongoDBCRAuthenticator,
    PlainAuthenticator,
    ScramSha1Authenticator,
    ScramSha256Authenticator,
)

__all__ = [
    "Authenticator",
    "PasswordAuthenticator",
    "UsernamePasswordCredential",
    "DEFAULT_CANDIDATES",
    "DefaultAuthenticator",
    "MongoDBCRAuthenticator",
    "ScramSha1Authenticator",
    "ScramSha256Authenticator",
    "PlainAuthenticator",
    "MongoDBX509Authenticator",
    "GssapiAuthenticator",
    "MongoAWSAuthenticator",
    "dispatch",
    "stringify_properties",
]
