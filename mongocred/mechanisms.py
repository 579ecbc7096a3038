"""Authentication mechanism names and source-default rules.

Mechanism names are matched case-insensitively and stored upper-case.
Source names are matched exactly: ``$EXTERNAL`` is not ``$external``.
"""

from __future__ import annotations

from enum import StrEnum

from mongocred.exceptions import InvalidCredentialConfigurationError
from mongocred.identity import EXTERNAL_SOURCE


class Mechanism(StrEnum):
    """Recognised authentication mechanisms."""

    DEFAULT = "DEFAULT"
    MONGODB_CR = "MONGODB-CR"
    SCRAM_SHA_1 = "SCRAM-SHA-1"
    SCRAM_SHA_256 = "SCRAM-SHA-256"
    MONGODB_AWS = "MONGODB-AWS"
    MONGODB_X509 = "MONGODB-X509"
    GSSAPI = "GSSAPI"
    PLAIN = "PLAIN"


#: Mechanisms that authenticate an internal user with a password.
PASSWORD_MECHANISMS: frozenset[Mechanism] = frozenset(
    {
        Mechanism.DEFAULT,
        Mechanism.MONGODB_CR,
        Mechanism.SCRAM_SHA_1,
        Mechanism.SCRAM_SHA_256,
    }
)

DEFAULT_INTERNAL_SOURCE = "admin"


def normalize_mechanism(mechanism: str | None) -> str:
    """Trim and upper-case *mechanism*; ``None`` becomes ``"DEFAULT"``."""
    if mechanism is None:
        return Mechanism.DEFAULT.value
    return mechanism.strip().upper()


def stored_mechanism(normalized: str) -> str | None:
    """Value kept on the credential: ``None`` for the default mechanism."""
    if normalized == Mechanism.DEFAULT:
        return None
    return normalized


def resolve_internal_source(source: str | None, database_name: str | None) -> str:
    """``source``, else ``database_name``, else ``"admin"``."""
    if source is not None:
        return source
    if database_name is not None:
        return database_name
    return DEFAULT_INTERNAL_SOURCE


def resolve_plain_source(source: str | None, database_name: str | None) -> str:
    """``source``, else ``database_name``, else ``"$external"``."""
    if source is not None:
        return source
    if database_name is not None:
        return database_name
    return EXTERNAL_SOURCE


def ensure_null_or_external_source(mechanism: str, source: str | None) -> None:
    """Reject any source other than ``None`` or the literal ``$external``."""
    if source is not None and source != EXTERNAL_SOURCE:
        msg = f"A {mechanism} source must be {EXTERNAL_SOURCE}, got '{source}'."
        raise InvalidCredentialConfigurationError(msg)
