"""Base64/hex codecs and packet size arithmetic.

None of these helpers know about packet framing; they are the building
blocks shared by the envelope builder, the parser, and the RSA wrappers.
"""

from __future__ import annotations

import base64
import binascii
import re

from pyripe._constants import AES_BLOCK_SIZE, DATA_DELIMITER, IV_HEX_LENGTH, PACKET_DELIMITER_SIZE
from pyripe.exceptions import RipeDecodeError

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def _to_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _to_text(value: str | bytes, *, name: str) -> str:
    if isinstance(value, str):
        return value
    try:
        return bytes(value).decode("ascii")
    except UnicodeDecodeError as exc:
        raise RipeDecodeError(f"{name} input is not ASCII text") from exc


def base64_encode(data: bytes | bytearray | str) -> str:
    """Encode *data* as standard Base64 with ``=`` padding and no line breaks.

    Strings are UTF-8 encoded first.
    """
    return base64.b64encode(_to_bytes(data)).decode("ascii")


def base64_decode(text: str | bytes) -> bytes:
    """Decode standard Base64 text.

    Raises
    ------
    RipeDecodeError
        If *text* contains characters outside the Base64 alphabet or has
        invalid padding.
    """
    value = _to_text(text, name="Base64")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise RipeDecodeError(f"Invalid Base64 input: {exc}") from exc


def hex_encode(data: bytes | bytearray | str) -> str:
    """Encode *data* as lowercase hex, two digits per byte."""
    return _to_bytes(data).hex()


def hex_decode(text: str | bytes) -> bytes:
    """Decode condensed hex text (upper or lower case).

    Raises
    ------
    RipeDecodeError
        On odd length or non-hex characters.
    """
    value = _to_text(text, name="Hex")
    if len(value) % 2 != 0:
        raise RipeDecodeError(f"Hex length must be even (got {len(value)})")
    if not _HEX_RE.fullmatch(value):
        raise RipeDecodeError("Hex input contains non-hex characters")
    return bytes.fromhex(value)


def normalize_hex(text: str) -> str:
    """Expand a condensed 32-character hex IV into space-separated byte pairs.

    ``"000102...0f"`` becomes ``"00 01 02 ... 0f"``. Any other input is
    returned unchanged.
    """
    if len(text) != IV_HEX_LENGTH:
        return text
    return " ".join(text[i : i + 2] for i in range(0, IV_HEX_LENGTH, 2))


def hex_pairs_to_bytes(text: str) -> bytes:
    """Parse whitespace-separated hex pairs (``"0a 1b ..."``) into bytes."""
    result = bytearray()
    for pair in text.split():
        if len(pair) > 2 or not _HEX_RE.fullmatch(pair):
            raise RipeDecodeError(f"Invalid hex pair {pair!r}")
        result.append(int(pair, 16))
    return bytes(result)


def expected_cipher_length(plain_len: int) -> int:
    """Ciphertext length of AES-CBC with PKCS#7 padding for *plain_len* bytes."""
    return ((plain_len // AES_BLOCK_SIZE) + 1) * AES_BLOCK_SIZE


def expected_base64_length(raw_len: int) -> int:
    """Base64 length (padding included) of *raw_len* bytes."""
    return ((raw_len + 2) // 3) * 4


def expected_packet_size(plain_len: int, identifier_len: int = 0) -> int:
    """Exact length of a framed packet carrying *plain_len* plaintext bytes.

    Parameters
    ----------
    plain_len : int
        Plaintext length in bytes. For text this is the UTF-8 encoded
        length, not ``len(text)``.
    identifier_len : int
        Length of the client identifier, ``0`` when absent.

    Returns
    -------
    int
        Packet length including the IV field, delimiters, and terminator.
    """
    size = IV_HEX_LENGTH + len(DATA_DELIMITER)
    if identifier_len > 0:
        size += identifier_len + len(DATA_DELIMITER)
    size += expected_base64_length(expected_cipher_length(plain_len))
    return size + PACKET_DELIMITER_SIZE
