"""Custom exception hierarchy for pyripe."""

from __future__ import annotations


class RipeError(Exception):
    """Base exception for all pyripe errors."""


class RipeKeyError(RipeError):
    """Key material is invalid, unparsable, or failed validation.

    Raised for AES keys of the wrong length and for RSA keys that cannot
    be loaded (bad PEM, wrong passphrase, failed consistency checks).
    """


class RipeFormatError(RipeError):
    """A packet cannot be tokenized into IV, identifier, and ciphertext fields."""


class RipeDecodeError(RipeError):
    """Base64 or hex decoding failure."""


class RipeCryptoError(RipeError):
    """Cipher operation failed.

    Covers bad padding, corrupt ciphertext, an IV mismatch, and RSA
    plaintexts larger than the key can carry. A wrong key and corrupted
    data are indistinguishable here.
    """


class RipeCompressionError(RipeError):
    """DEFLATE stream initialization or processing failure."""


class RipeArgumentError(RipeError):
    """Invalid argument (unsupported key length, empty required field)."""
