"""
Unit тесты для криптографических утилит.
"""

import string

import pytest

from oauth_server.utils.crypto import (
    RandomTokenGenerator,
    constant_time_compare,
    create_secret_context,
    hash_secret,
    hash_token,
    verify_secret,
)


@pytest.fixture
def generator():
    return RandomTokenGenerator()


@pytest.mark.parametrize("byte_length,expected_length", [(16, 32), (32, 64)])
def test_generate_length(generator, byte_length, expected_length):
    """Тест что длина hex строки соответствует числу байт."""
    value = generator.generate(byte_length)

    assert len(value) == expected_length
    assert set(value) <= set(string.hexdigits.lower())


def test_generate_never_repeats(generator):
    """Тест что значения не повторяются."""
    values = {generator.generate(16) for _ in range(1000)}

    assert len(values) == 1000


def test_generate_rejects_non_positive_length(generator):
    """Тест что нулевая длина запрещена."""
    with pytest.raises(ValueError):
        generator.generate(0)


def test_hash_token_is_stable_sha256():
    """Тест детерминированного SHA-256 хеша."""
    digest = hash_token("abc")

    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert hash_token("abc") == digest
    assert hash_token("abd") != digest


@pytest.fixture
def secret_context():
    return create_secret_context(rounds=4)


def test_secret_hash_roundtrip(secret_context):
    """Тест хеширования и проверки секрета клиента."""
    hashed = hash_secret("secret-s1-value", secret_context)

    assert hashed != "secret-s1-value"
    assert hashed.startswith("$2b$04$")
    assert verify_secret("secret-s1-value", hashed, secret_context) is True
    assert verify_secret("wrong-secret", hashed, secret_context) is False


def test_verify_secret_with_nul_byte(secret_context):
    """Тест что секрет с NUL байтом не совпадает, а не падает."""
    hashed = hash_secret("secret-s1-value", secret_context)

    assert verify_secret("bad\x00secret", hashed, secret_context) is False


def test_constant_time_compare():
    assert constant_time_compare("key", "key") is True
    assert constant_time_compare("key", "other") is False
