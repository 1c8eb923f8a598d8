"""Value objects returned by pyripe operations."""

from pyripe.models.keypair import KeyPair
from pyripe.models.packet import EncryptedData, OpenedPacket, PacketFields

__all__ = [
    "EncryptedData",
    "KeyPair",
    "OpenedPacket",
    "PacketFields",
]
