"""AES-CBC encryption with PKCS#7 padding and random IVs."""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pyripe._constants import AES_BLOCK_SIZE, AES_KEY_LENGTHS, DEFAULT_AES_KEY_LENGTH
from pyripe._crypto.codec import hex_encode
from pyripe.exceptions import RipeArgumentError, RipeCryptoError, RipeKeyError
from pyripe.models.packet import EncryptedData


def _allowed_lengths() -> str:
    return ", ".join(str(n) for n in sorted(AES_KEY_LENGTHS))


def coerce_key(key: bytes | str) -> bytes:
    """Return raw AES key bytes from raw bytes or hex text.

    Text keys are hex (32/48/64 characters, optional ``0x`` prefix).

    Raises
    ------
    RipeKeyError
        If the key is not hex text or is not 16, 24, or 32 bytes long.
    """
    if isinstance(key, str):
        text = key.strip()
        if text.startswith("0x") or text.startswith("0X"):
            text = text[2:]
        if not text:
            raise RipeKeyError("AES key is empty")
        if len(text) % 2 != 0:
            raise RipeKeyError(f"AES key hex length must be even (got {len(text)})")
        try:
            data = bytes.fromhex(text)
        except ValueError as exc:
            raise RipeKeyError("AES key must be hex-encoded") from exc
    else:
        data = bytes(key)

    if len(data) not in AES_KEY_LENGTHS:
        raise RipeKeyError(f"AES key must be {_allowed_lengths()} bytes (got {len(data)})")
    return data


def generate_new_key(length: int = DEFAULT_AES_KEY_LENGTH) -> str:
    """Generate a random AES key and return it as lowercase hex.

    Raises
    ------
    RipeArgumentError
        If *length* is not 16, 24, or 32.
    """
    if length not in AES_KEY_LENGTHS:
        raise RipeArgumentError(f"Invalid key length. Acceptable lengths are {_allowed_lengths()}")
    return hex_encode(os.urandom(length))


def generate_iv() -> bytes:
    """Fresh random 16-byte initialization vector."""
    return os.urandom(AES_BLOCK_SIZE)


def encrypt_raw(plaintext: bytes | str, key: bytes | str, *, iv: bytes | None = None) -> EncryptedData:
    """AES-CBC encrypt *plaintext* without any framing.

    Parameters
    ----------
    plaintext : bytes or str
        Data to encrypt. Strings are UTF-8 encoded.
    key : bytes or str
        Raw key bytes or their hex text.
    iv : bytes or None
        IV to use. A fresh random IV is generated when omitted; callers
        should only pass one to reproduce known vectors.

    Returns
    -------
    EncryptedData
        Padded ciphertext and the IV it was produced with.

    Raises
    ------
    RipeKeyError
        If the key length is invalid.
    """
    raw_key = coerce_key(key)
    data = plaintext.encode("utf-8") if isinstance(plaintext, str) else bytes(plaintext)
    if iv is None:
        iv = generate_iv()
    elif len(iv) != AES_BLOCK_SIZE:
        raise RipeArgumentError(f"IV must be {AES_BLOCK_SIZE} bytes, got {len(iv)}")

    try:
        padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
        padded = padder.update(data) + padder.finalize()
        encryptor = Cipher(algorithms.AES(raw_key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except ValueError as exc:
        raise RipeCryptoError(f"AES encryption failed: {exc}") from exc
    return EncryptedData(ciphertext=ciphertext, iv=iv)


def decrypt_raw(ciphertext: bytes, key: bytes | str, iv: bytes) -> bytes:
    """AES-CBC decrypt and unpad.

    Raises
    ------
    RipeKeyError
        If the key length is invalid.
    RipeArgumentError
        If *iv* is not 16 bytes.
    RipeCryptoError
        If the ciphertext is not block aligned or the padding is invalid
        (wrong key, corrupted data, or wrong IV).
    """
    raw_key = coerce_key(key)
    if len(iv) != AES_BLOCK_SIZE:
        raise RipeArgumentError(f"IV must be {AES_BLOCK_SIZE} bytes, got {len(iv)}")
    try:
        decryptor = Cipher(algorithms.AES(raw_key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(bytes(ciphertext)) + decryptor.finalize()
        unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise RipeCryptoError(f"AES decryption failed: {exc}") from exc
