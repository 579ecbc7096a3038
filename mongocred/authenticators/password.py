"""Authenticators for internal users proving identity with a password."""

from __future__ import annotations

from collections.abc import Sequence

from mongocred.authenticators.base import PasswordAuthenticator, UsernamePasswordCredential
from mongocred.evidence import require_ascii_password
from mongocred.mechanisms import Mechanism
from mongocred.server_api import ServerApi

#: Mechanisms offered, in preference order, when none was configured.
DEFAULT_CANDIDATES: tuple[str, ...] = (
    Mechanism.SCRAM_SHA_256.value,
    Mechanism.SCRAM_SHA_1.value,
)


class DefaultAuthenticator(PasswordAuthenticator):
    """Defers the mechanism choice to negotiation with the server.

    ``candidates`` lists the mechanisms the connection layer may pick from;
    which one wins depends on what the server advertises.
    """

    mechanism_name = Mechanism.DEFAULT.value

    def __init__(
        self,
        credential: UsernamePasswordCredential,
        server_api: ServerApi | None = None,
        candidates: Sequence[str] | None = None,
    ) -> None:
        super().__init__(credential, server_api)
        self.candidates = tuple(candidates) if candidates else DEFAULT_CANDIDATES


class MongoDBCRAuthenticator(PasswordAuthenticator):
    """Legacy challenge-response; deprecated since MongoDB 3.0."""

    mechanism_name = Mechanism.MONGODB_CR.value

    def __init__(
        self, credential: UsernamePasswordCredential, server_api: ServerApi | None = None
    ) -> None:
        require_ascii_password(credential.password)
        super().__init__(credential, server_api)


class ScramSha1Authenticator(PasswordAuthenticator):
    mechanism_name = Mechanism.SCRAM_SHA_1.value


class ScramSha256Authenticator(PasswordAuthenticator):
    mechanism_name = Mechanism.SCRAM_SHA_256.value


class PlainAuthenticator(PasswordAuthenticator):
    mechanism_name = Mechanism.PLAIN.value
