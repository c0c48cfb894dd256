"""
Tests for the credential validator.
"""

import pytest

from lockbox.auth.credentials import CredentialValidator


@pytest.fixture
def validator():
    return CredentialValidator("alice", "s3cret")


def test_exact_pair_is_accepted(validator):
    assert validator.validate("alice", "s3cret") is True


@pytest.mark.parametrize(
    "username,password",
    [
        ("alice", "wrong"),
        ("bob", "s3cret"),
        ("Alice", "s3cret"),
        ("alice", "S3CRET"),
        ("", ""),
        ("alice ", "s3cret"),
        (None, "s3cret"),
        ("alice", None),
    ],
)
def test_anything_else_is_rejected(validator, username, password):
    assert validator.validate(username, password) is False


def test_non_ascii_credentials():
    validator = CredentialValidator("zoë", "pässwörd")
    assert validator.validate("zoë", "pässwörd") is True
    assert validator.validate("zoe", "pässwörd") is False
