"""Shared fixtures for mongocred tests."""

from __future__ import annotations

import logging
import os

import pytest

from mongocred.evidence import ExternalEvidence, PasswordEvidence


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any MONGOCRED_* variables inherited from the outer environment."""
    for key in list(os.environ):
        if key.upper().startswith("MONGOCRED_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("mongocred")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def password():
    return PasswordEvidence("s3cret")


@pytest.fixture
def external():
    return ExternalEvidence()
