"""RSA key pair model."""

from __future__ import annotations

from pyripe._constants import DATA_DELIMITER
from pyripe._crypto.codec import base64_decode, base64_encode
from pyripe.exceptions import RipeDecodeError, RipeFormatError
from pyripe.models._base import RipeBaseModel


class KeyPair(RipeBaseModel):
    """A PEM-encoded RSA private key and its matching public key.

    Parameters
    ----------
    private_key : str
        PEM private key (PKCS#1), optionally passphrase-encrypted.
    public_key : str
        PEM public key (SubjectPublicKeyInfo).
    """

    private_key: str
    public_key: str

    def to_base64(self) -> str:
        """Compact transport form: ``base64(private) ":" base64(public)``."""
        return base64_encode(self.private_key) + DATA_DELIMITER + base64_encode(self.public_key)

    @classmethod
    def from_base64(cls, text: str) -> KeyPair:
        """Parse the compact form produced by :meth:`to_base64`.

        Raises
        ------
        RipeFormatError
            If the ``:`` separator is missing or either half is empty.
        RipeDecodeError
            If either half is not valid Base64 or not UTF-8 PEM text.
        """
        private_b64, sep, public_b64 = text.strip().partition(DATA_DELIMITER)
        if not sep or not private_b64 or not public_b64:
            raise RipeFormatError("Key pair must be in the form base64(private):base64(public)")
        try:
            private_pem = base64_decode(private_b64).decode("utf-8")
            public_pem = base64_decode(public_b64).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RipeDecodeError("Key pair halves are not UTF-8 PEM text") from exc
        return cls(private_key=private_pem, public_key=public_pem)
