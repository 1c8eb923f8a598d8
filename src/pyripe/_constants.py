"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Packet framing
# ------------------------------------------------------------------

PACKET_DELIMITER = "\r\n\r\n"
PACKET_DELIMITER_SIZE = len(PACKET_DELIMITER)
DATA_DELIMITER = ":"

# ------------------------------------------------------------------
# AES
# ------------------------------------------------------------------

AES_BLOCK_SIZE = 16
IV_HEX_LENGTH = AES_BLOCK_SIZE * 2
AES_KEY_LENGTHS: frozenset[int] = frozenset({16, 24, 32})
DEFAULT_AES_KEY_LENGTH = 32

# ------------------------------------------------------------------
# RSA
# ------------------------------------------------------------------

BITS_PER_BYTE = 8
DEFAULT_RSA_LENGTH = 2048
RSA_PUBLIC_EXPONENT = 65537
# PKCS#1 v1.5 encryption padding overhead in bytes.
PKCS1V15_OVERHEAD = 11

# ------------------------------------------------------------------
# Compression
# ------------------------------------------------------------------

ZLIB_BUFFER_SIZE = 32768
ZLIB_BEST_COMPRESSION = 9
