"""High-level client bundling the envelope protocol with file I/O."""

from __future__ import annotations

import logging
from pathlib import Path

from pyripe import compression
from pyripe._crypto import aes as _aes
from pyripe._crypto import rsa as _rsa
from pyripe._crypto.codec import base64_decode, base64_encode, expected_packet_size, hex_decode
from pyripe._redact import redact_for_log
from pyripe.config import RipeConfig
from pyripe.exceptions import RipeError
from pyripe.models.keypair import KeyPair
from pyripe.packet import build_packet, parse_packet

_logger = logging.getLogger(__name__)


def _write(path: str | Path, data: str | bytes) -> None:
    mode = "w" if isinstance(data, str) else "wb"
    with open(path, mode) as fh:
        fh.write(data)


class RipeClient:
    """Synchronous facade over the pyripe primitives.

    Holds no key material; the :class:`RipeConfig` only supplies defaults
    (key lengths, private key passphrase). Safe to share between threads.

    Usage::

        client = RipeClient(RipeConfig.from_env())
        key = client.generate_aes_key()
        packet = client.encrypt_aes("hello", key, identifier="dev1")
        assert client.decrypt_aes(packet, key) == b"hello"
    """

    def __init__(self, config: RipeConfig | None = None) -> None:
        self._config = config or RipeConfig()

    @property
    def config(self) -> RipeConfig:
        return self._config

    def _passphrase(self, passphrase: str | None) -> str | None:
        return passphrase if passphrase is not None else self._config.rsa_passphrase

    # ------------------------------------------------------------------
    # AES
    # ------------------------------------------------------------------

    def generate_aes_key(self, length: int | None = None) -> str:
        """Random AES key as hex; defaults to ``config.aes_key_length`` bytes."""
        return _aes.generate_new_key(length if length is not None else self._config.aes_key_length)

    def encrypt_aes(
        self,
        data: bytes | str,
        key: bytes | str,
        *,
        identifier: str = "",
        output_file: str | Path | None = None,
    ) -> str:
        """Encrypt *data* into a packet, or into a raw ciphertext file.

        Without *output_file* the framed packet is returned. With it, the
        raw ciphertext is written to the file and ``"IV: <hex>\\n"`` is
        returned so the caller can transmit the IV out of band.
        """
        _logger.debug("encrypt_aes %s", redact_for_log({"key": key, "identifier": identifier, "output": output_file}))
        if output_file is None:
            return build_packet(data, key, identifier)
        encrypted = _aes.encrypt_raw(data, key)
        _write(output_file, encrypted.ciphertext)
        return f"IV: {encrypted.iv_hex}\n"

    def decrypt_aes(
        self,
        data: str | bytes,
        key: bytes | str,
        *,
        iv: str | bytes | None = None,
        is_base64: bool = True,
        is_hex: bool = False,
    ) -> bytes:
        """Decrypt a packet or unframed ciphertext; see :func:`pyripe.packet.parse_packet`."""
        return parse_packet(data, key, iv, is_base64=is_base64, is_hex=is_hex)

    def expected_packet_size(self, plain_len: int, identifier_len: int = 0) -> int:
        return expected_packet_size(plain_len, identifier_len)

    # ------------------------------------------------------------------
    # RSA
    # ------------------------------------------------------------------

    def generate_rsa_key_pair(self, length: int | None = None) -> KeyPair:
        """Generate a key pair, encrypting the private key with ``config.rsa_passphrase`` if set."""
        bits = length if length is not None else self._config.rsa_key_length
        return _rsa.generate_key_pair(bits, self._config.rsa_passphrase)

    def generate_rsa_key_pair_base64(self, length: int | None = None) -> str:
        """Generate a key pair in the compact ``base64(private):base64(public)`` form."""
        return self.generate_rsa_key_pair(length).to_base64()

    def write_rsa_key_pair(
        self,
        public_file: str | Path,
        private_file: str | Path,
        length: int | None = None,
    ) -> KeyPair:
        """Generate a key pair and write each PEM to its own file.

        Both writes are attempted even if the first fails. Nothing is
        rolled back, so after a :class:`RipeError` the files on disk may
        be inconsistent.

        Raises
        ------
        RipeError
            If either file could not be written.
        """
        pair = self.generate_rsa_key_pair(length)
        ok = True
        for path, pem in ((private_file, pair.private_key), (public_file, pair.public_key)):
            try:
                _write(path, pem)
            except OSError as exc:
                _logger.error("Unable to open [%s]: %s", path, exc)
                ok = False
        if not ok:
            _logger.error("Failed to generate key pair! Please check logs for details")
            raise RipeError("Failed to generate key pair!")
        _logger.info("Successfully saved!")
        return pair

    def encrypt_rsa(
        self,
        data: bytes | str,
        public_pem: str | bytes,
        *,
        output_file: str | Path | None = None,
        is_raw: bool = False,
    ) -> str | bytes:
        """RSA-encrypt *data*, Base64 encoding the result unless *is_raw*.

        When *output_file* is given the result is written there and
        ``""`` is returned.
        """
        encrypted: str | bytes = _rsa.encrypt(data, public_pem)
        if not is_raw:
            encrypted = base64_encode(encrypted)
        if output_file is not None:
            _write(output_file, encrypted)
            return ""
        return encrypted

    def decrypt_rsa(
        self,
        data: str | bytes,
        private_pem: str | bytes,
        *,
        is_base64: bool = False,
        is_hex: bool = False,
        passphrase: str | None = None,
    ) -> bytes:
        """RSA-decrypt *data*, decoding Base64 and/or hex first when flagged."""
        _logger.debug(
            "decrypt_rsa %s",
            redact_for_log(
                {"private_pem": private_pem, "passphrase": passphrase, "is_base64": is_base64, "is_hex": is_hex}
            ),
        )
        ciphertext = data
        if is_base64:
            ciphertext = base64_decode(ciphertext)
        if is_hex:
            ciphertext = hex_decode(ciphertext)
        if isinstance(ciphertext, str):
            ciphertext = ciphertext.encode("latin-1")
        return _rsa.decrypt(ciphertext, private_pem, self._passphrase(passphrase))

    def sign_rsa(self, data: bytes | str, private_pem: str | bytes, passphrase: str | None = None) -> str:
        fields = {"data": data, "private_pem": private_pem, "passphrase": passphrase}
        _logger.debug("sign_rsa %s", redact_for_log(fields))
        return _rsa.sign(data, private_pem, self._passphrase(passphrase))

    def verify_rsa(self, data: bytes | str, signature_hex: str, public_pem: str | bytes) -> bool:
        return _rsa.verify(data, signature_hex, public_pem)

    @staticmethod
    def max_rsa_block_size(bits: int) -> int:
        return _rsa.max_block_size(bits)

    # ------------------------------------------------------------------
    # Compression
    # ------------------------------------------------------------------

    def compress(self, data: bytes | str) -> bytes:
        return compression.compress(data)

    def decompress(self, data: bytes) -> bytes:
        return compression.decompress(data)

    def compress_file(self, output_path: str | Path, input_path: str | Path) -> None:
        compression.compress_file(output_path, input_path)

    def decompress_file(self, output_path: str | Path, input_path: str | Path) -> None:
        compression.decompress_file(output_path, input_path)

    @staticmethod
    def version() -> str:
        from pyripe import __version__

        return __version__
