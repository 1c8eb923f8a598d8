from __future__ import annotations

import pytest

from pyripe.exceptions import RipeDecodeError, RipeFormatError
from pyripe.models import EncryptedData, KeyPair


def test_key_pair_compact_form_round_trip(rsa_pair: KeyPair) -> None:
    compact = rsa_pair.to_base64()

    assert compact.count(":") == 1
    assert "\n" not in compact
    assert KeyPair.from_base64(compact) == rsa_pair


@pytest.mark.parametrize("compact", ["", "onlyonehalf", ":cHVi", "cHJpdg==:"])
def test_key_pair_compact_form_requires_both_halves(compact: str) -> None:
    with pytest.raises(RipeFormatError):
        KeyPair.from_base64(compact)


def test_key_pair_compact_form_rejects_bad_base64() -> None:
    with pytest.raises(RipeDecodeError):
        KeyPair.from_base64("not*base64:cHVi")


def test_encrypted_data_iv_hex() -> None:
    data = EncryptedData(ciphertext=b"\x00" * 16, iv=bytes(range(16)))
    assert data.iv_hex == "000102030405060708090a0b0c0d0e0f"
