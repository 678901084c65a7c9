"""
Addresses: short identifiers of public keys.
"""

from ..config import ADDRESS_HEX_LENGTH, ADDRESS_SIZE
from ..errors import InvalidKeyError
from ..utils.hashing import address_hash
from .fixed import FixedBytes


class Address(FixedBytes):
    """
    20-byte one-way digest of a raw public key.

    Addresses are computed over raw key bytes, never over a routed
    encoding, so they do not change when routes or framing change.
    """

    __slots__ = ()

    SIZE = ADDRESS_SIZE

    @classmethod
    def from_hex(cls, hex_str: str) -> 'Address':
        """
        Parse an address from hex (either case).

        Raises:
            InvalidKeyError: If the string is not 40 hex characters
        """
        if not isinstance(hex_str, str) or len(hex_str) != ADDRESS_HEX_LENGTH:
            raise InvalidKeyError(f"Address must be {ADDRESS_HEX_LENGTH} hex characters")
        try:
            return cls(bytes.fromhex(hex_str))
        except ValueError as e:
            raise InvalidKeyError(f"Invalid address hex: {e}")

    def __str__(self) -> str:
        return self.hex().upper()

    def __repr__(self) -> str:
        return f"Address({self})"


def address_from_pub_key_bytes(pub_key_bytes: bytes) -> Address:
    """Derive the address of raw public key bytes."""
    return Address(address_hash(pub_key_bytes))
