"""Redaction of call arguments before they reach DEBUG logs.

pyripe is handed AES keys, PEM private keys and passphrases; none of them
may be written to a log.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SECRET_FIELDS: frozenset[str] = frozenset({"key", "private_pem", "passphrase", "data"})

_PEM_PRIVATE_MARKER = "PRIVATE KEY-----"


def _describe(value: Any, max_string: int) -> Any:
    if value is None or isinstance(value, (int, float, bool)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    text = str(value)
    if _PEM_PRIVATE_MARKER in text:
        return "<redacted-pem>"
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def redact_for_log(fields: Mapping[str, Any], *, max_string: int = 512) -> dict[str, Any]:
    """Return a copy of *fields* with secret values replaced.

    Secret fields become ``"<redacted>"`` (``None`` is kept so the log
    still shows whether a value was given). Other values are summarised:
    bytes by their length, private PEMs by a marker, long text truncated.
    """
    redacted: dict[str, Any] = {}
    for name, value in fields.items():
        if name in _SECRET_FIELDS and value is not None:
            redacted[name] = "<redacted>"
        else:
            redacted[name] = _describe(value, max_string)
    return redacted
