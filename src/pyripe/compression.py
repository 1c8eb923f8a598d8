"""DEFLATE compression for strings and files.

Byte strings use the zlib container; files use gzip. The maximum
compression level is always used.
"""

from __future__ import annotations

import gzip
import logging
import shutil
import zlib
from pathlib import Path

from pyripe._constants import ZLIB_BEST_COMPRESSION, ZLIB_BUFFER_SIZE
from pyripe.exceptions import RipeCompressionError

_logger = logging.getLogger(__name__)


def compress(data: bytes | str) -> bytes:
    """Compress *data* into a zlib stream.

    Raises
    ------
    RipeCompressionError
        If the deflate stream cannot be initialised or fails.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    try:
        compressor = zlib.compressobj(ZLIB_BEST_COMPRESSION)
        return compressor.compress(raw) + compressor.flush(zlib.Z_FINISH)
    except zlib.error as exc:
        raise RipeCompressionError(f"Exception during zlib compression: {exc}") from exc


def decompress(data: bytes) -> bytes:
    """Inflate a zlib stream produced by :func:`compress`.

    Raises
    ------
    RipeCompressionError
        If the stream is corrupt or ends before the final block.
    """
    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(bytes(data)) + decompressor.flush()
    except zlib.error as exc:
        raise RipeCompressionError(f"Exception during zlib decompression: {exc}") from exc
    if not decompressor.eof:
        raise RipeCompressionError("Exception during zlib decompression: premature end of stream")
    return result


def compress_file(output_path: str | Path, input_path: str | Path) -> None:
    """Gzip *input_path* into *output_path*.

    Raises
    ------
    RipeCompressionError
        If either file cannot be opened or compression fails.
    """
    try:
        with open(input_path, "rb") as src, gzip.open(output_path, "wb", compresslevel=ZLIB_BEST_COMPRESSION) as dst:
            shutil.copyfileobj(src, dst, ZLIB_BUFFER_SIZE)
    except (OSError, zlib.error) as exc:
        _logger.error("Unable to compress [%s] into [%s]: %s", input_path, output_path, exc)
        raise RipeCompressionError(f"Error during compression: {exc}") from exc


def decompress_file(output_path: str | Path, input_path: str | Path) -> None:
    """Inflate the gzip file *input_path* into *output_path*.

    Raises
    ------
    RipeCompressionError
        If either file cannot be opened, the input is not gzip data, or
        the stream is truncated.
    """
    try:
        with gzip.open(input_path, "rb") as src, open(output_path, "wb") as dst:
            shutil.copyfileobj(src, dst, ZLIB_BUFFER_SIZE)
    except (OSError, EOFError, zlib.error) as exc:
        _logger.error("Unable to decompress [%s] into [%s]: %s", input_path, output_path, exc)
        raise RipeCompressionError(f"Error during decompression: {exc}") from exc
