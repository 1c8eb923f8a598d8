"""Models describing framed packets and raw encryption results."""

from __future__ import annotations

from pyripe._crypto.codec import hex_encode
from pyripe.models._base import RipeBaseModel


class PacketFields(RipeBaseModel):
    """Fields of a framed packet, still in their wire (text) form.

    Parameters
    ----------
    iv : str
        The 32-character IV field exactly as it appeared on the wire.
    identifier : str
        Client identifier, empty when the packet carries none.
    ciphertext : str
        Encoded ciphertext field with the packet terminator removed.
    """

    iv: str
    identifier: str = ""
    ciphertext: str


class OpenedPacket(RipeBaseModel):
    """A decrypted packet together with the routing fields it carried."""

    plaintext: bytes
    identifier: str = ""
    iv: bytes


class EncryptedData(RipeBaseModel):
    """Unframed AES-CBC output; the IV travels out of band."""

    ciphertext: bytes
    iv: bytes

    @property
    def iv_hex(self) -> str:
        """The IV as 32 lowercase hex characters."""
        return hex_encode(self.iv)
