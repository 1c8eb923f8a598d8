"""Cryptographic primitives wrapped for the pyripe envelope protocol.

Submodules are imported directly (``pyripe._crypto.aes``,
``pyripe._crypto.rsa``, ``pyripe._crypto.codec``) so the models package
can depend on the codecs without an import cycle.
"""
