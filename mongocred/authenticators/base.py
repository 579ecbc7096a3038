"""Authenticator protocol and the username/password principal record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from mongocred.server_api import ServerApi


@dataclass(frozen=True)
class UsernamePasswordCredential:
    """Principal handed to password-based authenticators."""

    source: str
    username: str | None
    password: str = field(repr=False)


@runtime_checkable
class Authenticator(Protocol):
    """Protocol that all authenticators must implement.

    An authenticator captures everything one mechanism needs to run its
    handshake. The connection layer executes it; nothing here performs I/O.
    """

    mechanism_name: str
    server_api: ServerApi | None


class PasswordAuthenticator:
    """Shared shape of authenticators built from a username and password."""

    mechanism_name = ""

    def __init__(
        self, credential: UsernamePasswordCredential, server_api: ServerApi | None = None
    ) -> None:
        self.credential = credential
        self.server_api = server_api

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(username={self.credential.username!r}, "
            f"source={self.credential.source!r})"
        )
