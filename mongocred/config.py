"""Centralized configuration for mongocred.

Uses Pydantic BaseSettings with environment variable loading and validation.
All MONGOCRED_* environment variables are validated when ``Settings`` is
instantiated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

if TYPE_CHECKING:
    from mongocred.credential import Credential


def parse_mechanism_properties(raw: str) -> dict[str, str]:
    """Parse connection-string style ``KEY:VALUE,KEY2:VALUE2`` pairs.

    Values may themselves contain ``:`` (only the first one splits).
    """
    properties: dict[str, str] = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        key, sep, value = pair.partition(":")
        key = key.strip()
        if not sep or not key:
            msg = f"mechanism property must look like KEY:VALUE, got '{pair.strip()}'"
            raise ValueError(msg)
        properties[key] = value.strip()
    return properties


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = {"env_prefix": "MONGOCRED_", "case_sensitive": False, "extra": "ignore"}

    # Logging
    log_format: str = Field(default="text", description="Log format: text or json")
    log_level: str = Field(default="INFO", description="Python log level")

    # Credential
    auth_mechanism: str | None = Field(default=None, description="Authentication mechanism")
    auth_source: str | None = Field(default=None, description="Database holding the user")
    database: str | None = Field(default=None, description="Database named in the connection")
    username: str | None = Field(default=None, description="Principal name")
    password: SecretStr | None = Field(default=None, description="Password or secret key")
    auth_mechanism_properties: str = Field(
        default="", description="Comma-separated KEY:VALUE mechanism properties"
    )

    # Dispatch
    default_mechanisms: str = Field(
        default="SCRAM-SHA-256,SCRAM-SHA-1",
        description="Candidates offered when no mechanism is configured",
    )

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            msg = f"MONGOCRED_LOG_FORMAT must be 'text' or 'json', got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        import logging

        v = v.upper()
        if not isinstance(getattr(logging, v, None), int):
            msg = f"MONGOCRED_LOG_LEVEL must be a valid Python log level, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("auth_mechanism_properties")
    @classmethod
    def validate_mechanism_properties(cls, v: str) -> str:
        parse_mechanism_properties(v)
        return v

    @property
    def mechanism_properties(self) -> dict[str, str]:
        """Return the parsed mechanism properties."""
        return parse_mechanism_properties(self.auth_mechanism_properties)

    @property
    def default_mechanism_list(self) -> list[str]:
        """Return parsed list of default-mechanism candidates."""
        return [m.strip().upper() for m in self.default_mechanisms.split(",") if m.strip()]


def credential_from_settings(settings: Settings) -> Credential | None:
    """Build the configured credential, or ``None`` when none is configured."""
    if settings.username is None and settings.auth_mechanism is None:
        return None

    from mongocred.resolver import from_password

    credential = from_password(
        settings.auth_mechanism,
        settings.auth_source,
        settings.database,
        settings.username,
        settings.password,
    )
    properties = settings.mechanism_properties
    if properties:
        credential = credential.with_mechanism_properties(properties)
    return credential
