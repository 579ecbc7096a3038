"""Authenticators for identities proven outside the database.

GSSAPI and MONGODB-AWS accept either a full username/password principal
or just a username; both receive the mechanism properties as string pairs.
"""

from __future__ import annotations

from collections.abc import Iterable

from mongocred.authenticators.base import UsernamePasswordCredential
from mongocred.mechanisms import Mechanism
from mongocred.server_api import ServerApi


class MongoDBX509Authenticator:
    """Client-certificate authentication; the username may be omitted."""

    mechanism_name = Mechanism.MONGODB_X509.value

    def __init__(self, username: str | None, server_api: ServerApi | None = None) -> None:
        self.username = username
        self.server_api = server_api

    def __repr__(self) -> str:
        return f"MongoDBX509Authenticator(username={self.username!r})"


class _PropertyAuthenticator:
    mechanism_name = ""

    def __init__(
        self,
        principal: UsernamePasswordCredential | str | None,
        properties: Iterable[tuple[str, str]] = (),
        server_api: ServerApi | None = None,
    ) -> None:
        if isinstance(principal, UsernamePasswordCredential):
            self.credential: UsernamePasswordCredential | None = principal
            self.username = principal.username
        else:
            self.credential = None
            self.username = principal
        self.properties = tuple(properties)
        self.server_api = server_api

    @property
    def has_password(self) -> bool:
        return self.credential is not None

    def __repr__(self) -> str:
        keys = [key for key, _ in self.properties]
        return (
            f"{type(self).__name__}(username={self.username!r}, "
            f"has_password={self.has_password}, properties={keys!r})"
        )


class GssapiAuthenticator(_PropertyAuthenticator):
    """Kerberos. Common properties: SERVICE_NAME, CANONICALIZE_HOST_NAME, SERVICE_REALM."""

    mechanism_name = Mechanism.GSSAPI.value


class MongoAWSAuthenticator(_PropertyAuthenticator):
    """AWS IAM. The only property used is AWS_SESSION_TOKEN."""

    mechanism_name = Mechanism.MONGODB_AWS.value
