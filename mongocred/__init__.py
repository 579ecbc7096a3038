"""mongocred: validated authentication credentials for a MongoDB client."""

from __future__ import annotations

from mongocred.credential import AWS_SESSION_TOKEN, Credential
from mongocred.evidence import Evidence, ExternalEvidence, PasswordEvidence, ScopedSecret
from mongocred.exceptions import (
    InvalidArgumentError,
    InvalidCredentialConfigurationError,
    MongoCredError,
    UnsupportedAuthenticatorError,
    UnsupportedMechanismError,
)
from mongocred.identity import (
    EXTERNAL_SOURCE,
    ExternalAnonymousIdentity,
    ExternalIdentity,
    Identity,
    InternalIdentity,
)
from mongocred.mechanisms import Mechanism
from mongocred.resolver import from_password, resolve
from mongocred.server_api import ServerApi, ServerApiVersion

__all__ = [
    "AWS_SESSION_TOKEN",
    "Credential",
    "EXTERNAL_SOURCE",
    "Evidence",
    "ExternalAnonymousIdentity",
    "ExternalEvidence",
    "ExternalIdentity",
    "Identity",
    "InternalIdentity",
    "InvalidArgumentError",
    "InvalidCredentialConfigurationError",
    "Mechanism",
    "MongoCredError",
    "PasswordEvidence",
    "ScopedSecret",
    "ServerApi",
    "ServerApiVersion",
    "UnsupportedAuthenticatorError",
    "UnsupportedMechanismError",
    "from_password",
    "resolve",
]

__version__ = "0.1.0"
