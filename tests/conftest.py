from __future__ import annotations

import pytest

from pyripe._crypto.rsa import generate_key_pair
from pyripe.models import KeyPair

# Smallest modulus the backend accepts; keeps key generation fast.
TEST_RSA_BITS = 1024


@pytest.fixture(scope="session")
def rsa_pair() -> KeyPair:
    return generate_key_pair(TEST_RSA_BITS)


@pytest.fixture(scope="session")
def other_rsa_pair() -> KeyPair:
    return generate_key_pair(TEST_RSA_BITS)


@pytest.fixture
def aes_key() -> str:
    return "000102030405060708090a0b0c0d0e0f"
