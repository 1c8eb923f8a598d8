"""Command line interface for pyripe.

Examples::

    pyripe aes-keygen --length 16
    pyripe aes-encrypt --key 000102030405060708090a0b0c0d0e0f --identifier dev1 --data hello
    pyripe aes-decrypt --key 000102030405060708090a0b0c0d0e0f --in packet.txt
    pyripe rsa-keygen --public pub.pem --private priv.pem --length 2048
    pyripe rsa-encrypt --public pub.pem --data hello
    pyripe sign --private priv.pem --in message.txt
    pyripe compress --in big.log --out big.log.gz
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pyripe import __version__
from pyripe._crypto.codec import base64_decode, base64_encode, hex_decode, hex_encode
from pyripe._logging import configure_logging
from pyripe.client import RipeClient
from pyripe.config import RipeConfig
from pyripe.exceptions import RipeArgumentError, RipeError

_logger = logging.getLogger(__name__)


def _add_io(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--in", dest="in_file", type=Path, help="Read input from FILE")
    source.add_argument("--data", help="Use TEXT as input")
    parser.add_argument("--out", dest="out_file", type=Path, help="Write output to FILE instead of stdout")


def _read_input(args: argparse.Namespace) -> bytes:
    if args.data is not None:
        return str(args.data).encode("utf-8")
    if args.in_file is not None:
        return Path(args.in_file).read_bytes()
    return sys.stdin.buffer.read()


def _read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def _emit(args: argparse.Namespace, result: str | bytes) -> None:
    out_file = getattr(args, "out_file", None)
    if out_file is not None:
        if isinstance(result, str):
            Path(out_file).write_text(result, encoding="utf-8")
        else:
            Path(out_file).write_bytes(result)
        return
    if isinstance(result, str):
        sys.stdout.write(result if result.endswith("\n") else result + "\n")
        return
    sys.stdout.flush()
    sys.stdout.buffer.write(result)
    sys.stdout.buffer.flush()


def _ascii(data: bytes) -> str:
    try:
        return data.decode("ascii").strip()
    except UnicodeDecodeError as exc:
        raise RipeArgumentError("Input must be ASCII text") from exc


# ── handlers ─────────────────────────────────────────────────


def _cmd_aes_keygen(client: RipeClient, args: argparse.Namespace) -> None:
    _emit(args, client.generate_aes_key(args.length))


def _cmd_aes_encrypt(client: RipeClient, args: argparse.Namespace) -> None:
    data = _read_input(args)
    # With --out the raw ciphertext goes to the file and the IV to stdout.
    result = client.encrypt_aes(data, args.key, identifier=args.identifier, output_file=args.out_file)
    sys.stdout.write(result)


def _cmd_aes_decrypt(client: RipeClient, args: argparse.Namespace) -> None:
    data = _read_input(args)
    blob: str | bytes = data if args.raw else _ascii(data)
    is_base64 = not args.raw and not args.hex
    _emit(args, client.decrypt_aes(blob, args.key, iv=args.iv, is_base64=is_base64, is_hex=args.hex))


def _cmd_rsa_keygen(client: RipeClient, args: argparse.Namespace) -> None:
    if args.public is not None or args.private is not None:
        if args.public is None or args.private is None:
            raise RipeArgumentError("--public and --private must be given together")
        client.write_rsa_key_pair(args.public, args.private, args.length)
        return
    if args.compact:
        _emit(args, client.generate_rsa_key_pair_base64(args.length))
        return
    pair = client.generate_rsa_key_pair(args.length)
    _emit(args, pair.private_key + pair.public_key)


def _cmd_rsa_encrypt(client: RipeClient, args: argparse.Namespace) -> None:
    result = client.encrypt_rsa(
        _read_input(args),
        _read_text(args.public),
        output_file=args.out_file,
        is_raw=args.raw,
    )
    if result:
        _emit(args, result)


def _cmd_rsa_decrypt(client: RipeClient, args: argparse.Namespace) -> None:
    data = _read_input(args)
    encoded: str | bytes = _ascii(data) if (args.base64 or args.hex) else data
    result = client.decrypt_rsa(
        encoded,
        _read_text(args.private),
        is_base64=args.base64,
        is_hex=args.hex,
        passphrase=args.secret,
    )
    _emit(args, result)


def _cmd_sign(client: RipeClient, args: argparse.Namespace) -> None:
    _emit(args, client.sign_rsa(_read_input(args), _read_text(args.private), args.secret))


def _cmd_verify(client: RipeClient, args: argparse.Namespace) -> int:
    valid = client.verify_rsa(_read_input(args), args.signature, _read_text(args.public))
    sys.stdout.write("valid\n" if valid else "invalid\n")
    return 0 if valid else 2


def _cmd_compress(client: RipeClient, args: argparse.Namespace) -> None:
    if args.in_file is not None and args.out_file is not None:
        client.compress_file(args.out_file, args.in_file)
        return
    _emit(args, base64_encode(client.compress(_read_input(args))))


def _cmd_decompress(client: RipeClient, args: argparse.Namespace) -> None:
    if args.in_file is not None and args.out_file is not None:
        client.decompress_file(args.out_file, args.in_file)
        return
    _emit(args, client.decompress(base64_decode(_ascii(_read_input(args)))))


def _cmd_base64(_client: RipeClient, args: argparse.Namespace) -> None:
    data = _read_input(args)
    _emit(args, base64_decode(_ascii(data)) if args.decode else base64_encode(data))


def _cmd_hex(_client: RipeClient, args: argparse.Namespace) -> None:
    data = _read_input(args)
    _emit(args, hex_decode(_ascii(data)) if args.decode else hex_encode(data))


def _cmd_version(_client: RipeClient, _args: argparse.Namespace) -> None:
    sys.stdout.write(f"pyripe {__version__}\n")


# ── parser ───────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pyripe", description="Framed AES/RSA envelopes and codecs.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("aes-keygen", help="Generate a random AES key (hex)")
    p.add_argument("--length", type=int, default=None, help="Key length in bytes (16, 24, 32)")
    p.set_defaults(handler=_cmd_aes_keygen, out_file=None)

    p = sub.add_parser("aes-encrypt", help="Encrypt into a framed packet")
    p.add_argument("--key", required=True, help="AES key as hex")
    p.add_argument("--identifier", default="", help="Client identifier to embed in the packet")
    _add_io(p)
    p.set_defaults(handler=_cmd_aes_encrypt)

    p = sub.add_parser("aes-decrypt", help="Decrypt a packet or ciphertext")
    p.add_argument("--key", required=True, help="AES key as hex")
    p.add_argument("--iv", default=None, help="IV as hex when not carried in the packet")
    encoding = p.add_mutually_exclusive_group()
    encoding.add_argument("--hex", action="store_true", help="Ciphertext is hex encoded")
    encoding.add_argument("--raw", action="store_true", help="Ciphertext is raw bytes")
    _add_io(p)
    p.set_defaults(handler=_cmd_aes_decrypt)

    p = sub.add_parser("rsa-keygen", help="Generate an RSA key pair")
    p.add_argument("--length", type=int, default=None, help="Modulus length in bits")
    p.add_argument("--public", type=Path, default=None, help="Write the public key PEM to FILE")
    p.add_argument("--private", type=Path, default=None, help="Write the private key PEM to FILE")
    p.add_argument("--compact", action="store_true", help="Print base64(private):base64(public)")
    p.set_defaults(handler=_cmd_rsa_keygen, out_file=None)

    p = sub.add_parser("rsa-encrypt", help="Encrypt with a public key")
    p.add_argument("--public", type=Path, required=True, help="Public key PEM file")
    p.add_argument("--raw", action="store_true", help="Output raw bytes instead of Base64")
    _add_io(p)
    p.set_defaults(handler=_cmd_rsa_encrypt)

    p = sub.add_parser("rsa-decrypt", help="Decrypt with a private key")
    p.add_argument("--private", type=Path, required=True, help="Private key PEM file")
    p.add_argument("--secret", default=None, help="Private key passphrase")
    p.add_argument("--base64", action="store_true", help="Input is Base64 encoded")
    p.add_argument("--hex", action="store_true", help="Input is hex encoded")
    _add_io(p)
    p.set_defaults(handler=_cmd_rsa_decrypt)

    p = sub.add_parser("sign", help="Sign data (hex signature)")
    p.add_argument("--private", type=Path, required=True, help="Private key PEM file")
    p.add_argument("--secret", default=None, help="Private key passphrase")
    _add_io(p)
    p.set_defaults(handler=_cmd_sign)

    p = sub.add_parser("verify", help="Verify a hex signature")
    p.add_argument("--public", type=Path, required=True, help="Public key PEM file")
    p.add_argument("--signature", required=True, help="Signature as hex")
    _add_io(p)
    p.set_defaults(handler=_cmd_verify)

    p = sub.add_parser("compress", help="DEFLATE data (Base64 output) or gzip a file")
    _add_io(p)
    p.set_defaults(handler=_cmd_compress)

    p = sub.add_parser("decompress", help="Inflate Base64 data or gunzip a file")
    _add_io(p)
    p.set_defaults(handler=_cmd_decompress)

    p = sub.add_parser("base64", help="Base64 encode or decode")
    p.add_argument("--decode", action="store_true")
    _add_io(p)
    p.set_defaults(handler=_cmd_base64)

    p = sub.add_parser("hex", help="Hex encode or decode")
    p.add_argument("--decode", action="store_true")
    _add_io(p)
    p.set_defaults(handler=_cmd_hex)

    p = sub.add_parser("version", help="Print the library version")
    p.set_defaults(handler=_cmd_version)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = RipeConfig.from_env()
        configure_logging("DEBUG" if args.verbose else config.log_level)
    except ValueError as exc:
        sys.stderr.write(f"error: invalid RIPE_* configuration: {exc}\n")
        return 1

    try:
        result = args.handler(RipeClient(config), args)
    except (RipeError, OSError) as exc:
        _logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
