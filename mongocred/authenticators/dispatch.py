"""Select and construct the authenticator for a validated credential."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from mongocred.authenticators.base import Authenticator, UsernamePasswordCredential
from mongocred.authenticators.external import (
    GssapiAuthenticator,
    MongoAWSAuthenticator,
    MongoDBX509Authenticator,
)
from mongocred.authenticators.password import (
    DefaultAuthenticator,
    MongoDBCRAuthenticator,
    PlainAuthenticator,
    ScramSha1Authenticator,
    ScramSha256Authenticator,
)
from mongocred.credential import Credential
from mongocred.evidence import ExternalEvidence, PasswordEvidence
from mongocred.exceptions import UnsupportedAuthenticatorError
from mongocred.identity import EXTERNAL_SOURCE
from mongocred.mechanisms import Mechanism
from mongocred.server_api import ServerApi

logger = logging.getLogger("mongocred.authenticators.dispatch")

_PASSWORD_AUTHENTICATORS = {
    Mechanism.MONGODB_CR: MongoDBCRAuthenticator,
    Mechanism.SCRAM_SHA_1: ScramSha1Authenticator,
    Mechanism.SCRAM_SHA_256: ScramSha256Authenticator,
    Mechanism.PLAIN: PlainAuthenticator,
}

_PROPERTY_AUTHENTICATORS = {
    Mechanism.GSSAPI: GssapiAuthenticator,
    Mechanism.MONGODB_AWS: MongoAWSAuthenticator,
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def stringify_properties(properties: Mapping[str, Any]) -> tuple[tuple[str, str], ...]:
    """Mechanism properties as ``(key, str(value))`` pairs."""
    return tuple((key, _stringify(value)) for key, value in properties.items())


def _select(
    credential: Credential,
    server_api: ServerApi | None,
    default_mechanisms: Sequence[str] | None,
) -> Authenticator | None:
    mechanism = credential.mechanism
    evidence = credential.evidence

    if isinstance(evidence, PasswordEvidence):
        principal = UsernamePasswordCredential(
            credential.source, credential.username, evidence.reveal()
        )
        if mechanism is None:
            return DefaultAuthenticator(principal, server_api, default_mechanisms)
        if mechanism in _PASSWORD_AUTHENTICATORS:
            return _PASSWORD_AUTHENTICATORS[mechanism](principal, server_api)
        if mechanism in _PROPERTY_AUTHENTICATORS:
            properties = stringify_properties(credential.mechanism_properties)
            return _PROPERTY_AUTHENTICATORS[mechanism](principal, properties, server_api)
    elif isinstance(evidence, ExternalEvidence) and credential.source == EXTERNAL_SOURCE:
        if mechanism == Mechanism.MONGODB_X509:
            return MongoDBX509Authenticator(credential.username, server_api)
        if mechanism in _PROPERTY_AUTHENTICATORS:
            properties = stringify_properties(credential.mechanism_properties)
            return _PROPERTY_AUTHENTICATORS[mechanism](credential.username, properties, server_api)
    return None


def dispatch(
    credential: Credential,
    server_api: ServerApi | None = None,
    *,
    default_mechanisms: Sequence[str] | None = None,
) -> Authenticator:
    """Build the authenticator for *credential*.

    Password evidence selects by mechanism name, with ``None`` meaning the
    server's default mechanism. External evidence is only accepted for
    ``$external`` identities using MONGODB-X509, GSSAPI or MONGODB-AWS.

    Raises:
        UnsupportedAuthenticatorError: no authenticator fits the credential.
    """
    authenticator = _select(credential, server_api, default_mechanisms)
    if authenticator is None:
        logger.debug(
            "No authenticator for %s credential",
            credential.mechanism,
            extra={"mechanism": credential.mechanism, "source": credential.source},
        )
        msg = f"Unable to create an authenticator for mechanism {credential.mechanism}."
        raise UnsupportedAuthenticatorError(msg)

    logger.debug(
        "Selected %s for %s",
        type(authenticator).__name__,
        credential,
        extra={
            "mechanism": authenticator.mechanism_name,
            "username": credential.username,
            "authenticator": type(authenticator).__name__,
        },
    )
    return authenticator
