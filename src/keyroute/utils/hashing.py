"""
Cryptographic hashing utilities.
All hashing is deterministic and uses SHA-256.
"""

import hashlib

from ..config import HASH_ALGORITHM, ADDRESS_SIZE


def sha256(data: bytes) -> bytes:
    """
    Hash bytes using SHA-256.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte digest
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, got {type(data)}")

    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(data)
    return hasher.digest()


def address_hash(data: bytes) -> bytes:
    """
    Short digest used for addresses: SHA-256 truncated to 20 bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        20-byte digest
    """
    return sha256(data)[:ADDRESS_SIZE]
