"""RSA key generation, PKCS#1 v1.5 encryption, and signatures.

Every operation loads its key from PEM on each call; nothing is cached, so
the functions are safe to call from several threads at once. Loading a key
through ``cryptography`` runs its RSA consistency checks, which stand in for
the probabilistic validation rounds the wire protocol expects.
"""

from __future__ import annotations

import logging

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from pyripe._constants import BITS_PER_BYTE, DEFAULT_RSA_LENGTH, PKCS1V15_OVERHEAD, RSA_PUBLIC_EXPONENT
from pyripe._crypto.codec import hex_decode, hex_encode
from pyripe.exceptions import RipeArgumentError, RipeCryptoError, RipeDecodeError, RipeKeyError
from pyripe.models.keypair import KeyPair

_logger = logging.getLogger(__name__)

_PKCS1V15_MIN_PADDING = 8


def _to_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _secret_bytes(passphrase: str | bytes | None) -> bytes | None:
    if not passphrase:
        return None
    return _to_bytes(passphrase)


def max_block_size(bits: int) -> int:
    """Largest plaintext (bytes) a *bits*-bit key can encrypt with PKCS#1 v1.5."""
    return bits // BITS_PER_BYTE - PKCS1V15_OVERHEAD


def load_private_key(private_pem: str | bytes, passphrase: str | bytes | None = None) -> rsa.RSAPrivateKey:
    """Load and validate a PEM RSA private key.

    Raises
    ------
    RipeKeyError
        If the PEM cannot be parsed, the passphrase is wrong or missing,
        or the key is not an RSA key.
    """
    try:
        key = serialization.load_pem_private_key(_to_bytes(private_pem), password=_secret_bytes(passphrase))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise RipeKeyError(f"Could not load private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise RipeKeyError("Could not load private key: not an RSA key")
    return key


def load_public_key(public_pem: str | bytes) -> rsa.RSAPublicKey:
    """Load and validate a PEM RSA public key.

    Raises
    ------
    RipeKeyError
        If the PEM cannot be parsed or is not an RSA key.
    """
    try:
        key = serialization.load_pem_public_key(_to_bytes(public_pem))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise RipeKeyError(f"Could not load public key: {exc}") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise RipeKeyError("Could not load public key: not an RSA key")
    return key


def generate_key_pair(bits: int = DEFAULT_RSA_LENGTH, passphrase: str | bytes | None = None) -> KeyPair:
    """Generate an RSA key pair as PEM text.

    Parameters
    ----------
    bits : int
        Modulus length in bits.
    passphrase : str, bytes or None
        When given, the private key PEM is encrypted with it.

    Returns
    -------
    KeyPair
        PKCS#1 private key and SubjectPublicKeyInfo public key.

    Raises
    ------
    RipeArgumentError
        If the modulus length is not supported.
    """
    _logger.info("Generating key pair that can encrypt %d bytes", max_block_size(bits))
    try:
        private_key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bits)
    except ValueError as exc:
        raise RipeArgumentError(f"Invalid RSA key length {bits}: {exc}") from exc

    secret = _secret_bytes(passphrase)
    encryption: serialization.KeySerializationEncryption = (
        serialization.BestAvailableEncryption(secret) if secret else serialization.NoEncryption()
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=encryption,
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return KeyPair(private_key=private_pem.decode("ascii"), public_key=public_pem.decode("ascii"))


def encrypt(plaintext: bytes | str, public_pem: str | bytes) -> bytes:
    """PKCS#1 v1.5 encrypt a single block with a PEM public key.

    Raises
    ------
    RipeKeyError
        If the public key fails to load.
    RipeCryptoError
        If *plaintext* is longer than :func:`max_block_size` allows.
    """
    public_key = load_public_key(public_pem)
    try:
        return public_key.encrypt(_to_bytes(plaintext), padding.PKCS1v15())
    except ValueError as exc:
        raise RipeCryptoError(f"RSA encryption failed: {exc}") from exc


def _unpad_pkcs1v15(block: bytes) -> bytes:
    # EM = 0x00 || 0x02 || PS (at least 8 nonzero bytes) || 0x00 || M
    if len(block) < PKCS1V15_OVERHEAD or block[0] != 0x00 or block[1] != 0x02:
        raise RipeCryptoError("RSA decryption failed: invalid padding")
    separator = block.find(b"\x00", 2)
    if separator < _PKCS1V15_MIN_PADDING + 2:
        raise RipeCryptoError("RSA decryption failed: invalid padding")
    return block[separator + 1 :]


def decrypt(ciphertext: bytes, private_pem: str | bytes, passphrase: str | bytes | None = None) -> bytes:
    """PKCS#1 v1.5 decrypt with a PEM private key.

    The padding block is checked here rather than by OpenSSL: newer
    OpenSSL releases answer a bad block with random bytes (implicit
    rejection) instead of an error.

    Raises
    ------
    RipeKeyError
        If the private key fails to load or the passphrase is wrong.
    RipeCryptoError
        If the ciphertext has the wrong size or was not produced for this
        key.
    """
    private_key = load_private_key(private_pem, passphrase)
    numbers = private_key.private_numbers()
    modulus = numbers.public_numbers.n
    size = (private_key.key_size + BITS_PER_BYTE - 1) // BITS_PER_BYTE

    ciphertext = bytes(ciphertext)
    if len(ciphertext) != size:
        raise RipeCryptoError(f"RSA decryption failed: ciphertext must be {size} bytes, got {len(ciphertext)}")
    c = int.from_bytes(ciphertext, "big")
    if c >= modulus:
        raise RipeCryptoError("RSA decryption failed: ciphertext out of range")

    # CRT
    m1 = pow(c, numbers.dmp1, numbers.p)
    m2 = pow(c, numbers.dmq1, numbers.q)
    h = (numbers.iqmp * (m1 - m2)) % numbers.p
    m = m2 + h * numbers.q
    return _unpad_pkcs1v15(m.to_bytes(size, "big"))


def sign(data: bytes | str, private_pem: str | bytes, passphrase: str | bytes | None = None) -> str:
    """Sign *data* with PKCS#1 v1.5 and SHA-1, returning lowercase hex."""
    private_key = load_private_key(private_pem, passphrase)
    signature = private_key.sign(_to_bytes(data), padding.PKCS1v15(), hashes.SHA1())
    return hex_encode(signature)


def verify(data: bytes | str, signature_hex: str, public_pem: str | bytes) -> bool:
    """Check a hex signature produced by :func:`sign`.

    A mismatched or malformed signature returns ``False``; only an
    unusable public key raises (:class:`RipeKeyError`).
    """
    public_key = load_public_key(public_pem)
    try:
        signature = hex_decode(signature_hex.strip())
    except RipeDecodeError:
        _logger.debug("Signature is not valid hex")
        return False
    try:
        public_key.verify(signature, _to_bytes(data), padding.PKCS1v15(), hashes.SHA1())
    except (InvalidSignature, ValueError):
        return False
    return True
