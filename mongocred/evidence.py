"""Proof-of-identity evidence: a password or an externally established proof.

``PasswordEvidence`` keeps the secret in a :class:`ScopedSecret`, a private
``bytearray`` that is zeroed when released. The plain text is only handed
out by :meth:`PasswordEvidence.reveal`, which the authenticator dispatcher
uses when it builds a username/password principal.
"""

from __future__ import annotations

import hashlib
import hmac

from pydantic import SecretStr

from mongocred.exceptions import InvalidArgumentError


class ScopedSecret:
    """A UTF-8 secret held in a mutable buffer that can be wiped.

    Use it as a context manager, or call :meth:`release`, to zero the
    buffer deterministically. ``__del__`` wipes it as a last resort.
    """

    __slots__ = ("_buffer", "_released")

    def __init__(self, value: str | bytes | bytearray) -> None:
        if isinstance(value, str):
            self._buffer = bytearray(value.encode("utf-8"))
        elif isinstance(value, (bytes, bytearray)):
            try:
                bytes(value).decode("utf-8")
            except UnicodeDecodeError:
                raise InvalidArgumentError("secret must be valid UTF-8") from None
            self._buffer = bytearray(value)
        else:
            msg = f"secret must be str or bytes, got {type(value).__name__}"
            raise InvalidArgumentError(msg)
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def reveal(self) -> str:
        """Return the secret as text. Raises once the secret is released."""
        if self._released:
            raise InvalidArgumentError("secret has been released")
        return self._buffer.decode("utf-8")

    def matches(self, other: ScopedSecret) -> bool:
        """Constant-time comparison of two secrets."""
        if self._released or other._released:
            return self is other
        return hmac.compare_digest(bytes(self._buffer), bytes(other._buffer))

    def fingerprint(self) -> bytes:
        """SHA-256 digest of the secret, safe to feed into ``hash()``."""
        if self._released:
            return b""
        return hashlib.sha256(self._buffer).digest()

    def release(self) -> None:
        """Overwrite the buffer with zeros and mark the secret unusable."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._released = True

    def __enter__(self) -> ScopedSecret:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __del__(self) -> None:
        if not getattr(self, "_released", True):
            self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "held"
        return f"ScopedSecret(<{state}>)"


class PasswordEvidence:
    """Evidence backed by a password. Equality is by secret value."""

    __slots__ = ("_secret",)

    def __init__(self, password: str | bytes | bytearray | SecretStr) -> None:
        if password is None:
            raise InvalidArgumentError("password must not be None")
        if isinstance(password, SecretStr):
            password = password.get_secret_value()
        self._secret = ScopedSecret(password)

    def reveal(self) -> str:
        """Return the plain-text password."""
        return self._secret.reveal()

    @property
    def released(self) -> bool:
        return self._secret.released

    def release(self) -> None:
        self._secret.release()

    def __enter__(self) -> PasswordEvidence:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PasswordEvidence):
            return NotImplemented
        return self._secret.matches(other._secret)

    def __hash__(self) -> int:
        # Fingerprint is empty once released, so the hash changes then.
        return hash((PasswordEvidence, self._secret.fingerprint()))

    def __repr__(self) -> str:
        return "PasswordEvidence(password='****')"


class ExternalEvidence:
    """Marker evidence: the identity is proven outside the driver."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExternalEvidence):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(ExternalEvidence)

    def __repr__(self) -> str:
        return "ExternalEvidence()"


Evidence = PasswordEvidence | ExternalEvidence


def require_ascii_password(password: str | None) -> str:
    """Reject a missing or non-ASCII password.

    The legacy MONGODB-CR digest is computed over the raw password, so it
    only accepts 7-bit characters.
    """
    if password is None:
        raise InvalidArgumentError("password must not be None")
    if any(ord(c) >= 128 for c in password):
        raise InvalidArgumentError("Password must contain only ASCII characters.")
    return password
