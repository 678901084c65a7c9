"""
Key and signature capabilities.

Each capability is an abstract base class. Concrete algorithms subclass it
and register a route with the codec; code that only knows the capability
can still encode and decode values losslessly.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .address import Address
from .fixed import FixedBytes


class Signature(FixedBytes, ABC):
    """A signature produced by some algorithm."""

    __slots__ = ()

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Routed canonical encoding."""

    @abstractmethod
    def is_zero(self) -> bool:
        """True if the signature holds no content."""

    @abstractmethod
    def equals(self, other: 'Signature') -> bool:
        """Constant-time equality with another signature of the same algorithm."""


class PubKey(FixedBytes, ABC):
    """A public key of some algorithm."""

    __slots__ = ()

    @abstractmethod
    def address(self) -> Address:
        """Short identifier derived from the raw key bytes."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Routed canonical encoding."""

    @abstractmethod
    def verify_bytes(self, msg: bytes, sig: Signature) -> bool:
        """Verify a signature. Never raises; every failure is False."""

    @abstractmethod
    def equals(self, other: 'PubKey') -> bool:
        """Equality with another public key of the same algorithm."""

    @abstractmethod
    def to_x25519(self) -> Optional[bytes]:
        """Key-exchange form of this key, or None if not representable."""


class PrivKey(FixedBytes, ABC):
    """A private key of some algorithm."""

    __slots__ = ()

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Routed canonical encoding."""

    @abstractmethod
    def sign(self, msg: bytes) -> Signature:
        """
        Sign a message.

        Raises:
            SignatureError: If the algorithm cannot produce a signature
        """

    @abstractmethod
    def pub_key(self) -> PubKey:
        """Public key matching this private key."""

    @abstractmethod
    def equals(self, other: 'PrivKey') -> bool:
        """Constant-time equality with another private key of the same algorithm."""

    @abstractmethod
    def to_x25519(self) -> bytes:
        """Key-exchange form of this key."""
