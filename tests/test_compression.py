from __future__ import annotations

import gzip
import os
import zlib
from pathlib import Path

import pytest

from pyripe.compression import compress, compress_file, decompress, decompress_file
from pyripe.exceptions import RipeCompressionError


@pytest.mark.parametrize("data", [b"", b"a", b"hello world" * 1000, os.urandom(70000)])
def test_round_trip(data: bytes) -> None:
    assert decompress(compress(data)) == data


def test_compress_uses_best_compression() -> None:
    data = b"The quick brown fox jumps over the lazy dog. " * 200
    assert compress(data) == zlib.compress(data, 9)
    assert compress(data.decode("ascii")) == zlib.compress(data, 9)


def test_decompress_rejects_garbage() -> None:
    with pytest.raises(RipeCompressionError):
        decompress(b"definitely not deflate")


@pytest.mark.parametrize("data", [b"", b"\x78"])
def test_decompress_rejects_incomplete_stream(data: bytes) -> None:
    with pytest.raises(RipeCompressionError, match="premature end"):
        decompress(data)


def test_decompress_rejects_truncated_stream() -> None:
    stream = compress(os.urandom(4096))
    with pytest.raises(RipeCompressionError):
        decompress(stream[: len(stream) // 2])


def test_file_round_trip(tmp_path: Path) -> None:
    source = tmp_path / "input.txt"
    source.write_bytes(b"line of text\n" * 5000)
    packed = tmp_path / "input.txt.gz"
    restored = tmp_path / "restored.txt"

    compress_file(packed, source)
    assert gzip.decompress(packed.read_bytes()) == source.read_bytes()

    decompress_file(restored, packed)
    assert restored.read_bytes() == source.read_bytes()


def test_compress_file_missing_input(tmp_path: Path) -> None:
    with pytest.raises(RipeCompressionError):
        compress_file(tmp_path / "out.gz", tmp_path / "missing.txt")


def test_decompress_file_rejects_non_gzip(tmp_path: Path) -> None:
    source = tmp_path / "plain.txt"
    source.write_bytes(b"not gzip data")
    with pytest.raises(RipeCompressionError):
        decompress_file(tmp_path / "out.txt", source)


def test_decompress_file_rejects_truncated_gzip(tmp_path: Path) -> None:
    packed = tmp_path / "data.gz"
    packed.write_bytes(gzip.compress(os.urandom(10000))[:-20])
    with pytest.raises(RipeCompressionError):
        decompress_file(tmp_path / "out.bin", packed)
