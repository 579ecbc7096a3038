"""Declared server API version, forwarded unchanged to every authenticator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from mongocred.exceptions import InvalidArgumentError


class ServerApiVersion(StrEnum):
    V1 = "1"


@dataclass(frozen=True)
class ServerApi:
    """Stable API options sent with authentication commands."""

    version: ServerApiVersion = ServerApiVersion.V1
    strict: bool | None = None
    deprecation_errors: bool | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "version", ServerApiVersion(self.version))
        except ValueError:
            msg = f"Unsupported server API version: {self.version!r}"
            raise InvalidArgumentError(msg) from None
