"""
Ed25519 keys and signatures.

A private key is 64 bytes: the 32-byte seed followed by the 32-byte public
key derived from it. The public half is computed once when the key is made
and trusted from then on.
"""

import hmac
import os
from typing import Optional

import nacl.exceptions
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from nacl.bindings import (
    crypto_sign_ed25519_pk_to_curve25519,
    crypto_sign_ed25519_sk_to_curve25519,
)

from ..codec.binary import INT64_MAX, INT64_MIN, encode_struct
from ..config import (
    FINGERPRINT_LENGTH,
    PRIV_KEY_ED25519_SIZE,
    PUB_KEY_ED25519_SIZE,
    SEED_SIZE,
    SIGNATURE_ED25519_SIZE,
)
from ..errors import InvalidKeyError, InvariantViolationError, SignatureError
from ..utils.hashing import sha256
from .address import Address, address_from_pub_key_bytes
from .interfaces import PrivKey, PubKey, Signature


def _codec():
    from .encoding import cdc
    return cdc


class SignatureEd25519(Signature):
    """64-byte Ed25519 signature."""

    __slots__ = ()

    SIZE = SIGNATURE_ED25519_SIZE
    ERROR = SignatureError

    def to_bytes(self) -> bytes:
        return _codec().marshal_binary_bare(self)

    def is_zero(self) -> bool:
        """
        True if every byte is zero.

        The value is always 64 bytes long, so emptiness is judged by
        content rather than length.
        """
        return not any(self.raw)

    def equals(self, other) -> bool:
        """Constant-time comparison; False for other signature types."""
        if not isinstance(other, SignatureEd25519):
            return False
        return hmac.compare_digest(self.raw, other.raw)

    def __str__(self) -> str:
        return f"/{self.raw[:FINGERPRINT_LENGTH].hex().upper()}.../"

    def __repr__(self) -> str:
        return f"SignatureEd25519({self.hex().upper()})"


class PubKeyEd25519(PubKey):
    """32-byte Ed25519 public key."""

    __slots__ = ()

    SIZE = PUB_KEY_ED25519_SIZE

    def address(self) -> Address:
        """Address is the first 20 bytes of SHA-256 over the raw key."""
        return address_from_pub_key_bytes(self.raw)

    def to_bytes(self) -> bytes:
        return _codec().marshal_binary_bare(self)

    def verify_bytes(self, msg: bytes, sig: Signature) -> bool:
        """
        Verify an Ed25519 signature.

        Args:
            msg: Signed message
            sig: Signature to check

        Returns:
            True if valid. Signatures of another algorithm, malformed keys
            and bad signatures all give False.
        """
        if not isinstance(sig, SignatureEd25519):
            return False

        try:
            public_key = Ed25519PublicKey.from_public_bytes(self.raw)
            public_key.verify(sig.raw, msg)
            return True
        except (InvalidSignature, ValueError, TypeError):
            return False

    def to_x25519(self) -> Optional[bytes]:
        """
        Convert to an X25519 public key for key exchange.

        Returns:
            32-byte X25519 public key, or None if the point cannot be
            mapped (invalid encoding or small order)
        """
        try:
            return crypto_sign_ed25519_pk_to_curve25519(self.raw)
        except nacl.exceptions.RuntimeError:
            return None

    def equals(self, other) -> bool:
        if not isinstance(other, PubKeyEd25519):
            return False
        return self.raw == other.raw

    def __str__(self) -> str:
        return f"PubKeyEd25519{{{self.hex().upper()}}}"

    def __repr__(self) -> str:
        return str(self)


class PrivKeyEd25519(PrivKey):
    """64-byte Ed25519 private key: seed || public half."""

    __slots__ = ()

    SIZE = PRIV_KEY_ED25519_SIZE

    @property
    def seed(self) -> bytes:
        """Secret 32-byte seed. Handle with care."""
        return self.raw[:SEED_SIZE]

    def to_bytes(self) -> bytes:
        return _codec().marshal_binary_bare(self)

    def sign(self, msg: bytes) -> SignatureEd25519:
        """
        Sign a message with Ed25519.

        The signer is rebuilt from the seed alone; the stored public half
        is not consulted, so a key whose halves disagree still signs as its
        seed. Ed25519 signing cannot fail for a well-formed key; SignatureError
        is raised only if the backend rejects the seed.
        """
        try:
            signer = Ed25519PrivateKey.from_private_bytes(self.seed)
        except ValueError as e:
            raise SignatureError(f"Cannot load signing key: {e}")
        return SignatureEd25519(signer.sign(msg))

    def pub_key(self) -> PubKeyEd25519:
        """Return the embedded public half; it is not recomputed."""
        return PubKeyEd25519(self.raw[SEED_SIZE:])

    def equals(self, other) -> bool:
        """
        Compare with another private key.

        The type check may short-circuit; the byte comparison runs in
        constant time over all 64 bytes.
        """
        if not isinstance(other, PrivKeyEd25519):
            return False
        return hmac.compare_digest(self.raw, other.raw)

    def to_x25519(self) -> bytes:
        """Convert to a 32-byte X25519 private key for key exchange."""
        return crypto_sign_ed25519_sk_to_curve25519(self.raw)

    def derive(self, index: int) -> 'PrivKeyEd25519':
        """
        Deterministically derive a child key.

        The new seed is SHA-256 over the struct encoding of
        (this key's 64 bytes, index).

        Args:
            index: Signed 64-bit child index

        Returns:
            Child private key
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Index must be int, got {type(index).__name__}")
        if index < INT64_MIN or index > INT64_MAX:
            raise ValueError(f"Index out of 64-bit range: {index}")

        try:
            encoded = encode_struct(self.raw, index)
        except (TypeError, ValueError) as e:
            raise InvariantViolationError(f"Cannot encode derivation input: {e}")
        return _from_seed(sha256(encoded))

    def __repr__(self) -> str:
        return f"PrivKeyEd25519(pub={self.raw[SEED_SIZE:].hex().upper()})"


def _from_seed(seed: bytes) -> PrivKeyEd25519:
    if len(seed) != SEED_SIZE:
        raise InvalidKeyError(f"Seed must be {SEED_SIZE} bytes, got {len(seed)}")
    public_half = Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes_raw()
    return PrivKeyEd25519(seed + public_half)


def gen_priv_key_ed25519() -> PrivKeyEd25519:
    """
    Generate a private key from the operating system's secure random source.

    Returns:
        New PrivKeyEd25519
    """
    return _from_seed(os.urandom(SEED_SIZE))


def gen_priv_key_ed25519_from_secret(secret: bytes) -> PrivKeyEd25519:
    """
    Deterministically generate a private key from a secret.

    The seed is SHA-256(secret). No stretching is done, so a secret that
    comes from user input should first go through a KDF such as scrypt.

    Args:
        secret: High-entropy secret bytes

    Returns:
        PrivKeyEd25519
    """
    return _from_seed(sha256(secret))


def signature_ed25519_from_bytes(data: bytes) -> SignatureEd25519:
    """
    Build a signature from raw bytes without validation.

    Up to 64 bytes are copied; shorter input is zero padded and longer
    input is truncated.
    """
    return SignatureEd25519(bytes(data[:SIGNATURE_ED25519_SIZE]).ljust(SIGNATURE_ED25519_SIZE, b'\x00'))
