"""Framed AES packets: building, tokenizing, and parsing.

Wire format::

    <32 lowercase hex IV>:[<identifier>:]<base64 AES-CBC ciphertext>\\r\\n\\r\\n

The parser accepts three shapes of input:

* a fully framed packet (IV and optional identifier carried inline),
* Base64 (or hex) ciphertext with the IV supplied separately,
* raw ciphertext bytes with the IV supplied separately.

Whether a blob carries an inline IV is decided by :func:`has_framed_iv`,
which only checks that the first ``:`` sits at offset 32. It does not check
that the prefix is hex. Peers depend on this exact acceptance rule, so it
must not be replaced by content validation.
"""

from __future__ import annotations

import logging

from pyripe._constants import AES_BLOCK_SIZE, DATA_DELIMITER, IV_HEX_LENGTH, PACKET_DELIMITER
from pyripe._crypto.aes import decrypt_raw, encrypt_raw
from pyripe._crypto.codec import (
    base64_decode,
    base64_encode,
    hex_decode,
    hex_pairs_to_bytes,
    normalize_hex,
)
from pyripe.exceptions import RipeArgumentError, RipeDecodeError, RipeFormatError
from pyripe.models.packet import OpenedPacket, PacketFields

_logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _validate_identifier(identifier: str) -> None:
    if DATA_DELIMITER in identifier:
        raise RipeArgumentError(f"Identifier must not contain {DATA_DELIMITER!r}")
    if not identifier.isprintable():
        raise RipeArgumentError("Identifier must be printable")
    if len(identifier) == IV_HEX_LENGTH and set(identifier) <= _HEX_DIGITS:
        raise RipeArgumentError("Identifier must not look like a 32-character hex IV")


def _strip_terminator(text: str) -> str:
    if text.endswith(PACKET_DELIMITER):
        return text[: -len(PACKET_DELIMITER)]
    return text


def build_packet(plaintext: bytes | str, key: bytes | str, identifier: str = "") -> str:
    """Encrypt *plaintext* and frame it as a self-describing packet.

    Parameters
    ----------
    plaintext : bytes or str
        Payload to encrypt. Strings are UTF-8 encoded, so the packet size
        follows :func:`~pyripe._crypto.codec.expected_packet_size` of the
        encoded length.
    key : bytes or str
        Raw AES key (16, 24, or 32 bytes) or its hex text.
    identifier : str
        Optional client identifier, placed between IV and ciphertext so a
        multi-tenant receiver can pick the right key.

    Returns
    -------
    str
        ``iv:[identifier:]base64`` followed by ``"\\r\\n\\r\\n"``.

    Raises
    ------
    RipeKeyError
        If the key length is invalid.
    RipeArgumentError
        If the identifier cannot be framed unambiguously.
    """
    if identifier:
        _validate_identifier(identifier)
    encrypted = encrypt_raw(plaintext, key)

    parts = [encrypted.iv_hex]
    if identifier:
        parts.append(identifier)
    parts.append(base64_encode(encrypted.ciphertext))
    packet = DATA_DELIMITER.join(parts) + PACKET_DELIMITER
    _logger.debug("Built packet of %d bytes (identifier=%r)", len(packet), identifier)
    return packet


def has_framed_iv(blob: str) -> bool:
    """Whether *blob* starts with an inline IV field.

    True only when the first ``:`` is at offset 32. A 32-character
    identifier that is not hex still satisfies this, and is then misread
    as the IV.
    """
    return blob.find(DATA_DELIMITER) == IV_HEX_LENGTH


def tokenize_packet(blob: str) -> PacketFields | None:
    """Split a framed packet into its wire fields.

    Returns ``None`` when *blob* carries no inline IV field (see
    :func:`has_framed_iv`); the caller must then supply the IV.
    """
    if not has_framed_iv(blob):
        return None
    iv_text = blob[:IV_HEX_LENGTH]
    rest = blob[IV_HEX_LENGTH + 1 :]
    identifier, sep, remainder = rest.partition(DATA_DELIMITER)
    if sep:
        rest = remainder
    else:
        identifier = ""
    return PacketFields(iv=iv_text, identifier=identifier, ciphertext=_strip_terminator(rest))


def split_packets(stream: str) -> list[str]:
    """Split concatenated packets on the terminator, keeping each terminator.

    Trailing data without a terminator is an incomplete packet and is
    returned as the last element as-is.
    """
    packets: list[str] = []
    start = 0
    while True:
        end = stream.find(PACKET_DELIMITER, start)
        if end == -1:
            break
        end += len(PACKET_DELIMITER)
        packets.append(stream[start:end])
        start = end
    if start < len(stream):
        packets.append(stream[start:])
    return packets


def _resolve_iv(iv: str | bytes) -> bytes:
    if isinstance(iv, (bytes, bytearray)) and len(iv) == IV_HEX_LENGTH:
        # 32 bytes is never a raw IV; treat it as condensed hex text
        try:
            iv = bytes(iv).decode("ascii")
        except UnicodeDecodeError as exc:
            raise RipeDecodeError("IV of 32 bytes must be ASCII hex text") from exc
    if isinstance(iv, str):
        iv_bytes = hex_pairs_to_bytes(normalize_hex(iv.strip()))
    else:
        iv_bytes = bytes(iv)
    if len(iv_bytes) != AES_BLOCK_SIZE:
        raise RipeArgumentError(f"IV must be {AES_BLOCK_SIZE} bytes, got {len(iv_bytes)}")
    return iv_bytes


def _decode_body(body: str | bytes, *, is_base64: bool, is_hex: bool) -> bytes:
    if not is_base64 and not is_hex:
        if isinstance(body, str):
            raise RipeArgumentError("Raw ciphertext must be bytes")
        return bytes(body)

    if isinstance(body, bytes):
        try:
            body = body.decode("ascii")
        except UnicodeDecodeError as exc:
            raise RipeDecodeError("Encoded ciphertext is not ASCII text") from exc
    text = _strip_terminator(body)
    if not text:
        raise RipeFormatError("Packet has no ciphertext field")

    if is_base64:
        decoded = base64_decode(text)
        return hex_decode(decoded) if is_hex else decoded
    return hex_decode(text)


def parse_packet(
    blob: str | bytes,
    key: bytes | str,
    iv: str | bytes | None = None,
    *,
    is_base64: bool = True,
    is_hex: bool = False,
) -> bytes:
    """Decrypt a framed packet or an unframed ciphertext.

    Parameters
    ----------
    blob : str or bytes
        A framed packet, encoded ciphertext, or (raw mode) ciphertext bytes.
    key : bytes or str
        Raw AES key or its hex text.
    iv : str, bytes or None
        Explicit IV: 32 condensed hex characters (as text or ASCII bytes),
        space-separated hex pairs, or 16 raw bytes. When empty and *is_base64* is set, the IV
        is taken from the packet itself.
    is_base64 : bool
        The ciphertext field is Base64 encoded.
    is_hex : bool
        The ciphertext field is hex encoded.

    Returns
    -------
    bytes
        Decrypted plaintext.

    Raises
    ------
    RipeFormatError
        If no ciphertext field can be isolated, or no IV is available.
    RipeDecodeError
        If the IV, Base64, or hex text cannot be decoded.
    RipeCryptoError
        If decryption or unpadding fails.
    """
    body: str | bytes = blob
    if not iv and is_base64:
        text = blob.decode("ascii", errors="replace") if isinstance(blob, bytes) else blob
        fields = tokenize_packet(text)
        if fields is not None:
            iv = fields.iv
            body = fields.ciphertext
    if not iv:
        raise RipeFormatError("No IV supplied and the packet has no IV field")

    iv_bytes = _resolve_iv(iv)
    ciphertext = _decode_body(body, is_base64=is_base64, is_hex=is_hex)
    if not ciphertext:
        raise RipeFormatError("Packet has no ciphertext field")
    return decrypt_raw(ciphertext, key, iv_bytes)


def open_packet(blob: str, key: bytes | str) -> OpenedPacket:
    """Decrypt a framed packet and return the identifier it was addressed with.

    Raises
    ------
    RipeFormatError
        If *blob* is not a framed packet.
    """
    fields = tokenize_packet(blob)
    if fields is None:
        raise RipeFormatError("Blob is not a framed packet (no IV field)")
    iv_bytes = _resolve_iv(fields.iv)
    if not fields.ciphertext:
        raise RipeFormatError("Packet has no ciphertext field")
    plaintext = decrypt_raw(base64_decode(fields.ciphertext), key, iv_bytes)
    return OpenedPacket(plaintext=plaintext, identifier=fields.identifier, iv=iv_bytes)
