"""Resolve raw credential components into a validated :class:`Credential`.

Each mechanism has its own rules for where the identity lives (its
*source*), what evidence it needs and which identity shape it produces:

================================  ==========================  ==============
Mechanism                         Source                      Evidence
================================  ==========================  ==============
DEFAULT, MONGODB-CR, SCRAM-SHA-*  source/database/"admin"     password
MONGODB-AWS                       $external                   see below
MONGODB-X509                      $external                   external
GSSAPI                            $external                   any
PLAIN                             source/database/$external   password
================================  ==========================  ==============

MONGODB-AWS without a username takes its keys from the environment and so
must not carry a password; with a username (the access key id) it needs the
secret access key as password evidence.
"""

from __future__ import annotations

import logging

from pydantic import SecretStr

from mongocred.credential import Credential
from mongocred.evidence import Evidence, ExternalEvidence, PasswordEvidence
from mongocred.exceptions import InvalidCredentialConfigurationError, UnsupportedMechanismError
from mongocred.identity import (
    EXTERNAL_SOURCE,
    ExternalAnonymousIdentity,
    ExternalIdentity,
    Identity,
    InternalIdentity,
)
from mongocred.mechanisms import (
    PASSWORD_MECHANISMS,
    Mechanism,
    ensure_null_or_external_source,
    normalize_mechanism,
    resolve_internal_source,
    resolve_plain_source,
    stored_mechanism,
)

logger = logging.getLogger("mongocred.resolver")


def _fail(mechanism: str, message: str) -> InvalidCredentialConfigurationError:
    logger.debug("Credential rejected: %s", message, extra={"mechanism": mechanism})
    return InvalidCredentialConfigurationError(message)


def _require_username(mechanism: str, username: str | None) -> str:
    if username is None:
        raise _fail(mechanism, f"A {mechanism} credential must have a username.")
    return username


def _resolve_password_mechanism(
    mechanism: str, source: str | None, database_name: str | None, username: str | None, evidence
) -> Identity:
    # an empty password is allowed, a missing username is not
    resolved_source = resolve_internal_source(source, database_name)
    if not isinstance(evidence, PasswordEvidence):
        raise _fail(mechanism, f"A {mechanism} credential must have a password.")
    return InternalIdentity(resolved_source, _require_username(mechanism, username))


def _resolve_aws(source: str | None, username: str | None, evidence) -> Identity:
    mechanism = Mechanism.MONGODB_AWS.value
    ensure_null_or_external_source(mechanism, source)
    if username is None:
        if isinstance(evidence, PasswordEvidence):
            raise _fail(mechanism, "A MONGODB-AWS credential must have an access key id.")
        return ExternalAnonymousIdentity()
    if not isinstance(evidence, PasswordEvidence):
        raise _fail(mechanism, "A MONGODB-AWS credential must have a secret access key.")
    return ExternalIdentity(username)


def _resolve_x509(source: str | None, username: str | None, evidence) -> Identity:
    mechanism = Mechanism.MONGODB_X509.value
    ensure_null_or_external_source(mechanism, source)
    if not isinstance(evidence, ExternalEvidence):
        raise _fail(mechanism, "A MONGODB-X509 credential does not support a password.")
    return ExternalIdentity(username)


def _resolve_gssapi(source: str | None, username: str | None) -> Identity:
    mechanism = Mechanism.GSSAPI.value
    ensure_null_or_external_source(mechanism, source)
    return ExternalIdentity(_require_username(mechanism, username))


def _resolve_plain(
    source: str | None, database_name: str | None, username: str | None, evidence
) -> Identity:
    mechanism = Mechanism.PLAIN.value
    resolved_source = resolve_plain_source(source, database_name)
    if not isinstance(evidence, PasswordEvidence):
        raise _fail(mechanism, "A PLAIN credential must have a password.")
    username = _require_username(mechanism, username)
    if resolved_source == EXTERNAL_SOURCE:
        return ExternalIdentity(username)
    return InternalIdentity(resolved_source, username)


def resolve(
    mechanism: str | None,
    source: str | None,
    database_name: str | None,
    username: str | None,
    evidence: Evidence | None,
) -> Credential:
    """Validate the components and build the matching :class:`Credential`.

    Raises:
        InvalidCredentialConfigurationError: the identity or evidence does
            not fit the mechanism, or an external-only mechanism was given a
            source other than ``$external``.
        UnsupportedMechanismError: *mechanism* is not a known name.
        InvalidArgumentError: the resolved credential has no evidence.
    """
    normalized = normalize_mechanism(mechanism)

    if normalized in PASSWORD_MECHANISMS:
        identity = _resolve_password_mechanism(
            normalized, source, database_name, username, evidence
        )
    elif normalized == Mechanism.MONGODB_AWS:
        identity = _resolve_aws(source, username, evidence)
    elif normalized == Mechanism.MONGODB_X509:
        identity = _resolve_x509(source, username, evidence)
    elif normalized == Mechanism.GSSAPI:
        identity = _resolve_gssapi(source, username)
    elif normalized == Mechanism.PLAIN:
        identity = _resolve_plain(source, database_name, username, evidence)
    else:
        logger.debug("Unsupported mechanism %r", mechanism)
        raise UnsupportedMechanismError(f"Unsupported authentication mechanism {mechanism}.")

    credential = Credential(stored_mechanism(normalized), identity, evidence)
    logger.debug(
        "Resolved %s credential for %s",
        normalized,
        credential,
        extra={"mechanism": normalized, "source": identity.source, "username": identity.username},
    )
    return credential


def from_password(
    mechanism: str | None,
    source: str | None,
    database_name: str | None,
    username: str | None,
    password: str | SecretStr | None,
) -> Credential:
    """Like :func:`resolve`, taking a plain password.

    A ``None`` password means the identity is proven externally.
    """
    evidence: Evidence
    if password is None:
        evidence = ExternalEvidence()
    else:
        evidence = PasswordEvidence(password)
    return resolve(mechanism, source, database_name, username, evidence)
