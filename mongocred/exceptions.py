"""Custom exception hierarchy for mongocred.

Every error raised while building or dispatching a credential derives from
:class:`MongoCredError`. The concrete classes also derive from the matching
builtin so callers that only know about ``ValueError`` or
``NotImplementedError`` keep working.
"""

from __future__ import annotations


class MongoCredError(Exception):
    """Base exception for all mongocred errors."""

    error_type: str = "credential_error"

    def __init__(self, message: str = "Invalid credential") -> None:
        self.message = message
        super().__init__(message)


class InvalidArgumentError(MongoCredError, ValueError):
    """A required component is missing or malformed."""

    error_type = "invalid_argument"


class InvalidCredentialConfigurationError(MongoCredError, ValueError):
    """Identity or evidence does not fit the requested mechanism."""

    error_type = "invalid_credential_configuration"


class UnsupportedMechanismError(MongoCredError, NotImplementedError):
    """The mechanism name is not one of the known mechanisms."""

    error_type = "unsupported_mechanism"


class UnsupportedAuthenticatorError(MongoCredError, NotImplementedError):
    """No authenticator can be built for an otherwise valid credential."""

    error_type = "unsupported_authenticator"
