from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from pyripe._crypto.aes import encrypt_raw, generate_new_key
from pyripe._crypto.codec import base64_decode, base64_encode, expected_packet_size, hex_encode, normalize_hex
from pyripe.exceptions import (
    RipeArgumentError,
    RipeCryptoError,
    RipeDecodeError,
    RipeFormatError,
    RipeKeyError,
)
from pyripe.packet import (
    build_packet,
    has_framed_iv,
    open_packet,
    parse_packet,
    split_packets,
    tokenize_packet,
)

_IV_RE = re.compile(r"[0-9a-f]{32}")
_PLAINTEXTS = [b"", b"a", b"hello", b"x" * 15, b"y" * 16, b"z" * 17, bytes(range(256)) * 3]


def test_concrete_packet_layout(aes_key: str) -> None:
    packet = build_packet("hello", aes_key, "dev1")

    assert packet.endswith("\r\n\r\n")
    fields = packet[: -len("\r\n\r\n")].split(":")
    assert len(fields) == 3
    assert _IV_RE.fullmatch(fields[0])
    assert fields[1] == "dev1"
    assert len(base64_decode(fields[2])) == 16
    assert parse_packet(packet, aes_key) == b"hello"


@pytest.mark.parametrize("identifier", ["", "client-42"])
@pytest.mark.parametrize("plaintext", _PLAINTEXTS)
def test_round_trip(plaintext: bytes, identifier: str) -> None:
    key = generate_new_key(32)
    packet = build_packet(plaintext, key, identifier)
    assert parse_packet(packet, key) == plaintext


@pytest.mark.parametrize("identifier", ["", "dev1", "client-42"])
@pytest.mark.parametrize("plaintext", [*_PLAINTEXTS, "é" * 8, "naïve café"])
def test_packet_size_is_exact(plaintext: bytes | str, identifier: str, aes_key: str) -> None:
    packet = build_packet(plaintext, aes_key, identifier)
    raw = plaintext.encode("utf-8") if isinstance(plaintext, str) else plaintext
    assert len(packet) == expected_packet_size(len(raw), len(identifier))


def test_identical_inputs_produce_different_packets(aes_key: str) -> None:
    first = build_packet("same", aes_key).split(":")
    second = build_packet("same", aes_key).split(":")
    assert first[0] != second[0]
    assert first[1] != second[1]


def test_build_packet_accepts_raw_key_bytes() -> None:
    key = bytes(range(24))
    assert parse_packet(build_packet(b"payload", key), key) == b"payload"


def test_build_packet_rejects_bad_key_length() -> None:
    with pytest.raises(RipeKeyError):
        build_packet("hello", "00112233", "dev1")


@pytest.mark.parametrize("identifier", ["a:b", "tab\there", "00112233445566778899aabbccddeeff"])
def test_build_packet_rejects_ambiguous_identifiers(identifier: str, aes_key: str) -> None:
    with pytest.raises(RipeArgumentError):
        build_packet("hello", aes_key, identifier)


def test_has_framed_iv_checks_offset_only() -> None:
    assert has_framed_iv("0" * 32 + ":rest")
    assert has_framed_iv("x" * 32 + ":rest")
    assert not has_framed_iv("0" * 31 + ":rest")
    assert not has_framed_iv("0" * 33 + ":rest")
    assert not has_framed_iv("no delimiter at all")


def test_tokenize_packet_returns_fields(aes_key: str) -> None:
    packet = build_packet("hello", aes_key, "client-42")
    fields = tokenize_packet(packet)

    assert fields is not None
    assert fields.iv == packet[:32]
    assert fields.identifier == "client-42"
    assert not fields.ciphertext.endswith("\r\n")
    with pytest.raises(ValidationError):
        fields.identifier = "other"  # type: ignore[misc]


def test_tokenize_packet_without_identifier(aes_key: str) -> None:
    fields = tokenize_packet(build_packet("hello", aes_key))
    assert fields is not None
    assert fields.identifier == ""


def test_tokenize_packet_returns_none_when_no_iv_field() -> None:
    assert tokenize_packet("aGVsbG8=") is None


def test_ambiguous_identifier_is_read_as_iv(aes_key: str) -> None:
    """Regression: a 32-character non-hex identifier in first position is taken as the IV."""
    identifier = "abcd1234abcd1234abcd1234abcd123x"
    ciphertext = base64_encode(encrypt_raw(b"hello", aes_key).ciphertext)
    blob = f"{identifier}:{ciphertext}\r\n\r\n"

    fields = tokenize_packet(blob)
    assert fields is not None
    assert fields.iv == identifier
    assert fields.identifier == ""

    with pytest.raises(RipeDecodeError):
        parse_packet(blob, aes_key)


def test_parse_with_explicit_condensed_iv(aes_key: str) -> None:
    encrypted = encrypt_raw(b"payload", aes_key)
    blob = base64_encode(encrypted.ciphertext)
    assert parse_packet(blob, aes_key, encrypted.iv_hex) == b"payload"
    assert parse_packet(blob, aes_key, encrypted.iv_hex.upper()) == b"payload"


def test_parse_with_explicit_normalized_iv(aes_key: str) -> None:
    encrypted = encrypt_raw(b"payload", aes_key)
    blob = base64_encode(encrypted.ciphertext)
    assert parse_packet(blob, aes_key, normalize_hex(encrypted.iv_hex)) == b"payload"


def test_parse_with_explicit_iv_as_hex_bytes(aes_key: str) -> None:
    encrypted = encrypt_raw(b"payload", aes_key)
    blob = base64_encode(encrypted.ciphertext)
    assert parse_packet(blob, aes_key, encrypted.iv_hex.encode("ascii")) == b"payload"


def test_parse_rejects_32_byte_iv_that_is_not_hex(aes_key: str) -> None:
    encrypted = encrypt_raw(b"payload", aes_key)
    with pytest.raises(RipeDecodeError):
        parse_packet(base64_encode(encrypted.ciphertext), aes_key, b"\xff" * 32)


def test_parse_raw_ciphertext_with_iv_bytes(aes_key: str) -> None:
    encrypted = encrypt_raw(b"raw payload", aes_key)
    assert parse_packet(encrypted.ciphertext, aes_key, encrypted.iv, is_base64=False) == b"raw payload"


def test_parse_raw_mode_requires_bytes(aes_key: str) -> None:
    encrypted = encrypt_raw(b"raw payload", aes_key)
    with pytest.raises(RipeArgumentError):
        parse_packet("not bytes", aes_key, encrypted.iv, is_base64=False)


def test_parse_hex_ciphertext(aes_key: str) -> None:
    encrypted = encrypt_raw(b"hex payload", aes_key)
    blob = hex_encode(encrypted.ciphertext)
    assert parse_packet(blob, aes_key, encrypted.iv_hex, is_base64=False, is_hex=True) == b"hex payload"


def test_parse_accepts_bytes_packet(aes_key: str) -> None:
    packet = build_packet("hello", aes_key, "dev1")
    assert parse_packet(packet.encode("ascii"), aes_key) == b"hello"


def test_parse_without_terminator(aes_key: str) -> None:
    packet = build_packet("hello", aes_key, "dev1")
    assert parse_packet(packet.rstrip("\r\n"), aes_key) == b"hello"


def test_parse_does_not_mutate_input(aes_key: str) -> None:
    packet = build_packet("hello", aes_key, "dev1")
    original = str(packet)
    parse_packet(packet, aes_key)
    assert packet == original


def test_parse_without_any_iv_fails_with_format_error(aes_key: str) -> None:
    with pytest.raises(RipeFormatError):
        parse_packet("aGVsbG8=", aes_key)


@pytest.mark.parametrize("blob", ["0" * 32 + ":\r\n\r\n", "0" * 32 + ":dev1:", "0" * 32 + ":dev1:\r\n\r\n"])
def test_parse_empty_ciphertext_field_fails_with_format_error(blob: str, aes_key: str) -> None:
    with pytest.raises(RipeFormatError):
        parse_packet(blob, aes_key)


def test_parse_invalid_base64_fails_with_decode_error(aes_key: str) -> None:
    with pytest.raises(RipeDecodeError):
        parse_packet("0" * 32 + ":dev1:not*base64\r\n\r\n", aes_key)


def test_parse_rejects_iv_of_wrong_length(aes_key: str) -> None:
    encrypted = encrypt_raw(b"payload", aes_key)
    with pytest.raises(RipeArgumentError):
        parse_packet(base64_encode(encrypted.ciphertext), aes_key, "0011")


def test_parse_corrupted_ciphertext_fails_with_crypto_error(aes_key: str) -> None:
    encrypted = encrypt_raw(b"payload", aes_key)
    truncated = base64_encode(encrypted.ciphertext[:15])
    with pytest.raises(RipeCryptoError):
        parse_packet(f"{encrypted.iv_hex}:{truncated}\r\n\r\n", aes_key)


def test_parse_with_wrong_key_never_returns_plaintext(aes_key: str) -> None:
    encrypted = encrypt_raw(b"secret payload", aes_key, iv=bytes(16))
    packet = f"{encrypted.iv_hex}:{base64_encode(encrypted.ciphertext)}\r\n\r\n"

    failures = 0
    for n in range(1, 9):
        wrong_key = bytes([n]) * 16
        try:
            assert parse_packet(packet, wrong_key) != b"secret payload"
        except RipeCryptoError:
            failures += 1
    assert failures > 0


def test_open_packet_surfaces_identifier(aes_key: str) -> None:
    packet = build_packet("hello", aes_key, "client-42")
    opened = open_packet(packet, aes_key)

    assert opened.plaintext == b"hello"
    assert opened.identifier == "client-42"
    assert hex_encode(opened.iv) == packet[:32]


def test_open_packet_requires_framed_packet(aes_key: str) -> None:
    with pytest.raises(RipeFormatError):
        open_packet("aGVsbG8=", aes_key)


def test_split_packets_scans_for_terminator(aes_key: str) -> None:
    first = build_packet("one", aes_key, "a")
    second = build_packet("two", aes_key, "b")
    partial = "0" * 32 + ":incomplete"

    packets = split_packets(first + second + partial)

    assert packets == [first, second, partial]
    assert [parse_packet(p, aes_key) for p in packets[:2]] == [b"one", b"two"]


def test_split_packets_empty_stream() -> None:
    assert split_packets("") == []
