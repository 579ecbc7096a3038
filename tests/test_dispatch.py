"""Tests for selecting an authenticator from a validated credential."""

from __future__ import annotations

import logging

import pytest

from mongocred.authenticators import (
    DEFAULT_CANDIDATES,
    Authenticator,
    DefaultAuthenticator,
    GssapiAuthenticator,
    MongoAWSAuthenticator,
    MongoDBCRAuthenticator,
    MongoDBX509Authenticator,
    PlainAuthenticator,
    ScramSha1Authenticator,
    ScramSha256Authenticator,
    UsernamePasswordCredential,
    dispatch,
    stringify_properties,
)
from mongocred.credential import Credential
from mongocred.evidence import ExternalEvidence, PasswordEvidence
from mongocred.exceptions import InvalidArgumentError, UnsupportedAuthenticatorError
from mongocred.identity import ExternalIdentity, InternalIdentity
from mongocred.resolver import resolve
from mongocred.server_api import ServerApi


# ---------------------------------------------------------------------------
# Password evidence
# ---------------------------------------------------------------------------


class TestPasswordDispatch:
    def test_default_mechanism(self):
        credential = resolve(None, None, "app", "alice", PasswordEvidence("pw"))
        authenticator = dispatch(credential)
        assert isinstance(authenticator, DefaultAuthenticator)
        assert authenticator.credential == UsernamePasswordCredential("app", "alice", "pw")
        assert authenticator.candidates == DEFAULT_CANDIDATES

    def test_default_candidates_override(self):
        credential = resolve(None, None, None, "alice", PasswordEvidence("pw"))
        authenticator = dispatch(credential, default_mechanisms=["SCRAM-SHA-1"])
        assert authenticator.candidates == ("SCRAM-SHA-1",)

    @pytest.mark.parametrize(
        ("mechanism", "expected"),
        [
            ("SCRAM-SHA-1", ScramSha1Authenticator),
            ("SCRAM-SHA-256", ScramSha256Authenticator),
            ("PLAIN", PlainAuthenticator),
        ],
    )
    def test_by_mechanism_name(self, mechanism, expected):
        credential = resolve(mechanism, None, None, "alice", PasswordEvidence("pw"))
        authenticator = dispatch(credential)
        assert type(authenticator) is expected
        assert authenticator.mechanism_name == mechanism
        assert authenticator.credential.password == "pw"

    def test_mongo_cr(self):
        credential = resolve("MONGODB-CR", None, None, "alice", PasswordEvidence("pw"))
        assert isinstance(dispatch(credential), MongoDBCRAuthenticator)

    def test_mongo_cr_rejects_non_ascii_password(self):
        credential = resolve("MONGODB-CR", None, None, "alice", PasswordEvidence("pässwörd"))
        with pytest.raises(InvalidArgumentError, match="ASCII"):
            dispatch(credential)

    def test_scram_accepts_non_ascii_password(self):
        credential = resolve("SCRAM-SHA-256", None, None, "alice", PasswordEvidence("pässwörd"))
        assert dispatch(credential).credential.password == "pässwörd"

    def test_gssapi_with_password_forwards_properties(self):
        credential = resolve("GSSAPI", None, None, "user@REALM", PasswordEvidence("pw"))
        credential = credential.with_mechanism_property("SERVICE_NAME", "mongo")
        credential = credential.with_mechanism_property("CANONICALIZE_HOST_NAME", True)
        authenticator = dispatch(credential)
        assert isinstance(authenticator, GssapiAuthenticator)
        assert authenticator.has_password is True
        assert authenticator.credential.source == "$external"
        assert dict(authenticator.properties) == {
            "SERVICE_NAME": "mongo",
            "CANONICALIZE_HOST_NAME": "true",
        }

    def test_aws_with_secret_key(self):
        credential = Credential.create_aws_credential("AKIA123", "secret", session_token="tok")
        authenticator = dispatch(credential)
        assert isinstance(authenticator, MongoAWSAuthenticator)
        assert authenticator.username == "AKIA123"
        assert authenticator.credential.password == "secret"
        assert authenticator.properties == (("AWS_SESSION_TOKEN", "tok"),)

    def test_x509_with_password_unsupported(self):
        credential = Credential(
            "MONGODB-X509", ExternalIdentity("bob"), PasswordEvidence("pw")
        )
        with pytest.raises(UnsupportedAuthenticatorError):
            dispatch(credential)


# ---------------------------------------------------------------------------
# External evidence
# ---------------------------------------------------------------------------


class TestExternalDispatch:
    def test_x509(self):
        credential = resolve("MONGODB-X509", None, None, "CN=bob", ExternalEvidence())
        authenticator = dispatch(credential)
        assert isinstance(authenticator, MongoDBX509Authenticator)
        assert authenticator.username == "CN=bob"

    def test_x509_without_username(self):
        authenticator = dispatch(Credential.create_mongo_x509_credential())
        assert isinstance(authenticator, MongoDBX509Authenticator)
        assert authenticator.username is None

    def test_gssapi(self):
        credential = Credential.create_gssapi_credential("user@REALM").with_mechanism_property(
            "SERVICE_REALM", "EXAMPLE.COM"
        )
        authenticator = dispatch(credential)
        assert isinstance(authenticator, GssapiAuthenticator)
        assert authenticator.has_password is False
        assert authenticator.username == "user@REALM"
        assert authenticator.properties == (("SERVICE_REALM", "EXAMPLE.COM"),)

    def test_aws_anonymous(self):
        authenticator = dispatch(Credential.create_aws_credential())
        assert isinstance(authenticator, MongoAWSAuthenticator)
        assert authenticator.username is None
        assert authenticator.credential is None

    def test_external_evidence_with_internal_source_unsupported(self):
        credential = Credential("GSSAPI", InternalIdentity("admin", "u"), ExternalEvidence())
        with pytest.raises(UnsupportedAuthenticatorError):
            dispatch(credential)

    def test_external_evidence_with_password_mechanism_unsupported(self):
        credential = Credential("SCRAM-SHA-1", ExternalIdentity("u"), ExternalEvidence())
        with pytest.raises(UnsupportedAuthenticatorError):
            dispatch(credential)

    def test_external_evidence_default_mechanism_unsupported(self):
        credential = Credential(None, ExternalIdentity("u"), ExternalEvidence())
        with pytest.raises(UnsupportedAuthenticatorError):
            dispatch(credential)


# ---------------------------------------------------------------------------
# Unknown mechanisms, server API, protocol
# ---------------------------------------------------------------------------


class TestDispatchMisc:
    def test_unknown_mechanism_unsupported(self):
        credential = Credential("SCRAM-SHA-512", InternalIdentity("admin", "u"), PasswordEvidence("p"))
        with pytest.raises(UnsupportedAuthenticatorError, match="SCRAM-SHA-512"):
            dispatch(credential)

    def test_server_api_forwarded(self):
        server_api = ServerApi(strict=True)
        credential = resolve("SCRAM-SHA-256", None, None, "alice", PasswordEvidence("pw"))
        assert dispatch(credential, server_api).server_api is server_api
        x509 = Credential.create_mongo_x509_credential("bob")
        assert dispatch(x509, server_api).server_api is server_api

    def test_to_authenticator_delegates(self):
        credential = resolve("PLAIN", None, None, "alice", PasswordEvidence("pw"))
        assert isinstance(credential.to_authenticator(), PlainAuthenticator)

    @pytest.mark.parametrize(
        "credential",
        [
            resolve(None, None, None, "alice", PasswordEvidence("pw")),
            Credential.create_mongo_x509_credential("bob"),
            Credential.create_gssapi_credential("user@REALM"),
        ],
    )
    def test_conforms_to_protocol(self, credential):
        assert isinstance(dispatch(credential), Authenticator)

    def test_repr_hides_password(self):
        credential = resolve("SCRAM-SHA-1", None, None, "alice", PasswordEvidence("topsecret"))
        authenticator = dispatch(credential)
        assert "topsecret" not in repr(authenticator)
        assert "topsecret" not in repr(authenticator.credential)

    def test_selection_logged(self, caplog):
        credential = resolve("SCRAM-SHA-1", None, None, "alice", PasswordEvidence("topsecret"))
        with caplog.at_level(logging.DEBUG, logger="mongocred.authenticators"):
            dispatch(credential)
        rec = caplog.records[-1]
        assert rec.authenticator == "ScramSha1Authenticator"
        assert "topsecret" not in caplog.text


class TestStringifyProperties:
    def test_values_become_strings(self):
        assert stringify_properties({"A": 1, "B": False, "C": "x"}) == (
            ("A", "1"),
            ("B", "false"),
            ("C", "x"),
        )


class TestServerApi:
    def test_version_coerced(self):
        assert ServerApi("1").version == "1"

    def test_unknown_version_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ServerApi("2")
