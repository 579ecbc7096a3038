"""Immutable credential aggregate: mechanism, identity, evidence, properties.

Credentials are normally built through :func:`mongocred.resolver.resolve`
or one of the ``create_*`` factories below, which enforce the per-mechanism
rules. A credential never changes after construction;
:meth:`Credential.with_mechanism_property` returns a copy.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from mongocred.evidence import Evidence, ExternalEvidence, PasswordEvidence
from mongocred.exceptions import InvalidArgumentError
from mongocred.identity import EXTERNAL_SOURCE, Identity

if TYPE_CHECKING:
    from pydantic import SecretStr

    from mongocred.authenticators.base import Authenticator
    from mongocred.server_api import ServerApi

#: Mechanism property carrying the AWS session token.
AWS_SESSION_TOKEN = "AWS_SESSION_TOKEN"


def _canonical(value: Any) -> Any:
    """Hashable stand-in for *value* that is equal whenever the values are equal."""
    if isinstance(value, Mapping):
        return frozenset((_canonical(k), _canonical(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_canonical(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_canonical(item) for item in value)
    try:
        hash(value)
    except TypeError:
        return type(value).__name__
    return value


class Credential:
    """Credential used to authenticate a connection.

    Two credentials are equal when identity, evidence, mechanism and the
    *set* of mechanism properties are equal; property insertion order does
    not matter.
    """

    __slots__ = ("_mechanism", "_identity", "_evidence", "_mechanism_properties")

    def __init__(
        self,
        mechanism: str | None,
        identity: Identity,
        evidence: Evidence,
        mechanism_properties: Mapping[str, Any] | None = None,
    ) -> None:
        if identity is None:
            raise InvalidArgumentError("identity must not be None")
        if evidence is None:
            raise InvalidArgumentError("evidence must not be None")
        object.__setattr__(self, "_mechanism", mechanism)
        object.__setattr__(self, "_identity", identity)
        object.__setattr__(self, "_evidence", evidence)
        object.__setattr__(
            self, "_mechanism_properties", MappingProxyType(dict(mechanism_properties or {}))
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def mechanism(self) -> str | None:
        """Upper-case mechanism name, or ``None`` for the default mechanism."""
        return self._mechanism

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def evidence(self) -> Evidence:
        return self._evidence

    @property
    def mechanism_properties(self) -> Mapping[str, Any]:
        """Read-only view of the mechanism properties."""
        return self._mechanism_properties

    @property
    def source(self) -> str:
        return self._identity.source

    @property
    def username(self) -> str | None:
        return self._identity.username

    def get_mechanism_property(
        self,
        key: str,
        default: Any = None,
        expected_type: type | tuple[type, ...] | None = None,
    ) -> Any:
        """Return the property stored under *key*, or *default* when absent.

        The value is checked against *expected_type*, or against the type
        of *default* when that is not ``None``. A mismatch raises
        :class:`InvalidArgumentError` instead of handing back a value of
        the wrong type.
        """
        if key not in self._mechanism_properties:
            return default
        value = self._mechanism_properties[key]
        if expected_type is None and default is not None:
            expected_type = type(default)
        if expected_type is not None and not isinstance(value, expected_type):
            msg = (
                f"Mechanism property '{key}' is {type(value).__name__}, "
                f"expected {getattr(expected_type, '__name__', expected_type)}"
            )
            raise InvalidArgumentError(msg)
        return value

    def with_mechanism_property(self, key: str, value: Any) -> Credential:
        """Return a copy with *key* set to *value* (overwriting any old value)."""
        return self.with_mechanism_properties({key: value})

    def with_mechanism_properties(self, properties: Mapping[str, Any]) -> Credential:
        """Return a copy with every entry of *properties* applied."""
        merged = dict(self._mechanism_properties)
        merged.update(properties)
        return Credential(self._mechanism, self._identity, self._evidence, merged)

    def to_authenticator(self, server_api: ServerApi | None = None) -> Authenticator:
        """Build the authenticator a connection should run for this credential."""
        from mongocred.authenticators.dispatch import dispatch

        return dispatch(self, server_api)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Credential):
            return NotImplemented
        return (
            self._identity == other._identity
            and self._evidence == other._evidence
            and self._mechanism == other._mechanism
            and dict(self._mechanism_properties) == dict(other._mechanism_properties)
        )

    def __hash__(self) -> int:
        """Hash consistent with ``==``.

        Releasing the password evidence changes its hash, so do not release
        a credential that is still used as a set member or dict key.
        """
        properties = frozenset(
            (key, _canonical(value)) for key, value in self._mechanism_properties.items()
        )
        return hash((self._identity, self._evidence, self._mechanism, properties))

    def __str__(self) -> str:
        return f"{self._identity.username}@{self._identity.source}"

    def __repr__(self) -> str:
        return (
            f"Credential(mechanism={self._mechanism!r}, identity={self._identity!r}, "
            f"evidence={self._evidence!r}, "
            f"mechanism_properties={dict(self._mechanism_properties)!r})"
        )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create_credential(
        cls, database_name: str | None, username: str, password: str | SecretStr
    ) -> Credential:
        """Credential for the server's default mechanism."""
        from mongocred.resolver import resolve

        return resolve(None, None, database_name, username, PasswordEvidence(password))

    @classmethod
    def create_gssapi_credential(
        cls, username: str, password: str | SecretStr | None = None
    ) -> Credential:
        """Kerberos credential; the password is optional (keytab/ticket cache)."""
        from mongocred.resolver import resolve

        evidence = ExternalEvidence() if password is None else PasswordEvidence(password)
        return resolve("GSSAPI", EXTERNAL_SOURCE, None, username, evidence)

    @classmethod
    def create_mongo_cr_credential(
        cls, database_name: str | None, username: str, password: str | SecretStr
    ) -> Credential:
        warnings.warn(
            "MONGODB-CR was replaced by SCRAM-SHA-1 in MongoDB 3.0, and is now deprecated.",
            DeprecationWarning,
            stacklevel=2,
        )
        from mongocred.resolver import resolve

        return resolve("MONGODB-CR", None, database_name, username, PasswordEvidence(password))

    @classmethod
    def create_mongo_x509_credential(cls, username: str | None = None) -> Credential:
        from mongocred.resolver import resolve

        return resolve("MONGODB-X509", EXTERNAL_SOURCE, None, username, ExternalEvidence())

    @classmethod
    def create_plain_credential(
        cls, database_name: str | None, username: str, password: str | SecretStr
    ) -> Credential:
        from mongocred.resolver import resolve

        return resolve("PLAIN", None, database_name, username, PasswordEvidence(password))

    @classmethod
    def create_aws_credential(
        cls,
        access_key_id: str | None = None,
        secret_access_key: str | SecretStr | None = None,
        session_token: str | None = None,
    ) -> Credential:
        """MONGODB-AWS credential.

        With no access key id the driver picks credentials up from the
        environment, so *secret_access_key* must be omitted as well.
        """
        from mongocred.resolver import resolve

        if secret_access_key is None:
            evidence: Evidence = ExternalEvidence()
        else:
            evidence = PasswordEvidence(secret_access_key)
        credential = resolve("MONGODB-AWS", None, None, access_key_id, evidence)
        if session_token is not None:
            credential = credential.with_mechanism_property(AWS_SESSION_TOKEN, session_token)
        return credential
