"""
Unit tests for realm public key formatting.
"""

import pytest

from service_oauth.app.keycloak.keys import (
    PEM_FOOTER,
    PEM_HEADER,
    format_public_key,
    get_public_key,
)
from shared.errors import ConfigurationError


@pytest.mark.parametrize("length", [1, 63, 64, 65, 128, 392])
def test_format_public_key_wraps_at_64(length):
    """Every body line is 64 characters except possibly the last."""
    key = ("ABCDEFGHIJ" * 40)[:length]

    pem = format_public_key(key)
    lines = pem.split("\n")

    assert lines[0] == PEM_HEADER
    assert lines[-1] == PEM_FOOTER
    body = lines[1:-1]
    assert "".join(body) == key
    assert all(len(line) == 64 for line in body[:-1])
    assert 0 < len(body[-1]) <= 64


def test_format_public_key_has_no_trailing_newline():
    pem = format_public_key("A" * 70)
    assert pem.endswith(PEM_FOOTER)
    assert pem == f"{PEM_HEADER}\n{'A' * 64}\n{'A' * 6}\n{PEM_FOOTER}"


@pytest.mark.parametrize("key", [None, ""])
def test_format_public_key_missing(key):
    with pytest.raises(ConfigurationError, match="missing key"):
        format_public_key(key)


@pytest.mark.parametrize("raw_key", [None, "", "   ", "\n\t "])
def test_get_public_key_absent_returns_none(raw_key):
    assert get_public_key(raw_key) is None


def test_get_public_key_loads_with_cryptography(token_generator):
    """The formatted key is a PEM document cryptography can load."""
    from cryptography.hazmat.primitives.serialization import load_pem_public_key

    pem = get_public_key(token_generator.raw_public_key)
    key = load_pem_public_key(pem.encode("ascii"))

    assert key.public_numbers() == token_generator.private_key.public_key().public_numbers()
