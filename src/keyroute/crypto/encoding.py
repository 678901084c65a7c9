"""
Process-wide crypto codec.

The codec is built and sealed once, at import time, before any caller can
use it. Route collisions surface here as RouteConflictError, failing the
import rather than silently changing canonical encodings and addresses.
"""

from typing import Any

from ..codec import Codec
from ..config import (
    ED25519_PRIV_KEY_ROUTE,
    ED25519_PUB_KEY_ROUTE,
    ED25519_SIGNATURE_ROUTE,
)
from .ed25519 import PrivKeyEd25519, PubKeyEd25519, SignatureEd25519
from .interfaces import PrivKey, PubKey, Signature


def register_crypto(codec: Codec):
    """Register the key and signature capabilities and their Ed25519 types."""
    codec.register_interface(PubKey)
    codec.register_concrete(PubKeyEd25519, ED25519_PUB_KEY_ROUTE)

    codec.register_interface(PrivKey)
    codec.register_concrete(PrivKeyEd25519, ED25519_PRIV_KEY_ROUTE)

    codec.register_interface(Signature)
    codec.register_concrete(SignatureEd25519, ED25519_SIGNATURE_ROUTE)


def new_codec() -> Codec:
    """Build a sealed codec with every crypto type registered."""
    codec = Codec()
    register_crypto(codec)
    codec.seal()
    return codec


cdc = new_codec()


def priv_key_from_bytes(data: bytes) -> PrivKey:
    """
    Decode a routed private key.

    Raises:
        DecodeError: If the bytes are not a registered private key
    """
    return cdc.unmarshal_binary_bare(data, PrivKey)


def pub_key_from_bytes(data: bytes) -> PubKey:
    """
    Decode a routed public key.

    Raises:
        DecodeError: If the bytes are not a registered public key
    """
    return cdc.unmarshal_binary_bare(data, PubKey)


def signature_from_bytes(data: bytes) -> Signature:
    """
    Decode a routed signature.

    Raises:
        DecodeError: If the bytes are not a registered signature
    """
    return cdc.unmarshal_binary_bare(data, Signature)


def to_json(value: Any) -> bytes:
    """Routed canonical JSON of a key or signature."""
    return cdc.marshal_json(value)


def priv_key_from_json(data) -> PrivKey:
    return cdc.unmarshal_json(data, PrivKey)


def pub_key_from_json(data) -> PubKey:
    return cdc.unmarshal_json(data, PubKey)


def signature_from_json(data) -> Signature:
    return cdc.unmarshal_json(data, Signature)
