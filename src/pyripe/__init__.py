"""pyripe - framed AES/RSA envelope protocol with Base64, hex, and DEFLATE helpers."""

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyripe")
except PackageNotFoundError:
    __version__ = "0+local"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pyripe._constants import DATA_DELIMITER, PACKET_DELIMITER  # noqa: E402
from pyripe._crypto.aes import decrypt_raw, encrypt_raw, generate_new_key  # noqa: E402
from pyripe._crypto.codec import (  # noqa: E402
    base64_decode,
    base64_encode,
    expected_base64_length,
    expected_cipher_length,
    expected_packet_size,
    hex_decode,
    hex_encode,
)
from pyripe._logging import configure_logging  # noqa: E402
from pyripe.client import RipeClient  # noqa: E402
from pyripe.config import RipeConfig  # noqa: E402
from pyripe.exceptions import (  # noqa: E402
    RipeArgumentError,
    RipeCompressionError,
    RipeCryptoError,
    RipeDecodeError,
    RipeError,
    RipeFormatError,
    RipeKeyError,
)
from pyripe.models import EncryptedData, KeyPair, OpenedPacket, PacketFields  # noqa: E402
from pyripe.packet import (  # noqa: E402
    build_packet,
    has_framed_iv,
    open_packet,
    parse_packet,
    split_packets,
    tokenize_packet,
)

__all__ = [
    "__version__",
    "DATA_DELIMITER",
    "EncryptedData",
    "KeyPair",
    "OpenedPacket",
    "PACKET_DELIMITER",
    "PacketFields",
    "RipeArgumentError",
    "RipeClient",
    "RipeCompressionError",
    "RipeConfig",
    "RipeCryptoError",
    "RipeDecodeError",
    "RipeError",
    "RipeFormatError",
    "RipeKeyError",
    "base64_decode",
    "base64_encode",
    "build_packet",
    "configure_logging",
    "decrypt_raw",
    "encrypt_raw",
    "expected_base64_length",
    "expected_cipher_length",
    "expected_packet_size",
    "generate_new_key",
    "has_framed_iv",
    "hex_decode",
    "hex_encode",
    "open_packet",
    "parse_packet",
    "split_packets",
    "tokenize_packet",
]
