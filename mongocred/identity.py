"""Principal identities and the namespace they authenticate against."""

from __future__ import annotations

from dataclasses import dataclass

from mongocred.exceptions import InvalidArgumentError

#: Source meaning the principal is not scoped to an application database.
EXTERNAL_SOURCE = "$external"


@dataclass(frozen=True)
class InternalIdentity:
    """A user defined inside a named database (the *source*)."""

    source: str
    username: str

    def __post_init__(self) -> None:
        if not self.source:
            raise InvalidArgumentError("source must be a non-empty string")
        if self.username is None:
            raise InvalidArgumentError("username must not be None")


@dataclass(frozen=True)
class ExternalIdentity:
    """A user authenticated against ``$external``.

    ``username`` is only ever ``None`` for MONGODB-X509, where the server
    takes the subject name from the client certificate.
    """

    username: str | None

    @property
    def source(self) -> str:
        return EXTERNAL_SOURCE


@dataclass(frozen=True)
class ExternalAnonymousIdentity:
    """No principal at all: AWS credentials come from the environment."""

    @property
    def source(self) -> str:
        return EXTERNAL_SOURCE

    @property
    def username(self) -> None:
        return None


Identity = InternalIdentity | ExternalIdentity | ExternalAnonymousIdentity
