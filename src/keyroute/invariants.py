"""
Runtime key invariant validation.
These checks ensure core identity properties are maintained.
"""

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from .codec import Codec
from .errors import InvariantViolationError
from .crypto.address import Address
from .crypto.ed25519 import PrivKeyEd25519
from .crypto.interfaces import PrivKey, PubKey, Signature


def validate_public_half(priv_key: PrivKeyEd25519):
    """
    Validate that a private key's public half matches its seed.

    Args:
        priv_key: Private key to check

    Raises:
        InvariantViolationError: If the public half was not derived from the seed
    """
    expected = Ed25519PrivateKey.from_private_bytes(priv_key.seed).public_key().public_bytes_raw()
    if priv_key.pub_key().raw != expected:
        raise InvariantViolationError(
            f"Public half {priv_key.pub_key().hex()} does not match seed; "
            f"expected {expected.hex()}"
        )


def validate_address_binding(address: Address, pub_key: PubKey):
    """
    Validate that an address was derived from a public key.

    Raises:
        InvariantViolationError: If the address belongs to another key
    """
    expected = pub_key.address()
    if address != expected:
        raise InvariantViolationError(
            f"Address {address} not bound to public key. Expected {expected}"
        )


def validate_codec(codec: Codec):
    """
    Validate that a codec is sealed and its routes are unambiguous.

    Raises:
        InvariantViolationError: If the codec is open or two concrete types
            of one capability share a route prefix
    """
    if not codec.sealed:
        raise InvariantViolationError("Codec must be sealed before use")

    for iface in (PrivKey, PubKey, Signature):
        prefixes = {}
        for route, cls in codec.routes(iface).items():
            prefix = codec.info_for(cls).prefix
            if prefix in prefixes:
                raise InvariantViolationError(
                    f"Routes {prefixes[prefix]!r} and {route!r} share prefix "
                    f"{prefix.hex().upper()} in {iface.__name__}"
                )
            prefixes[prefix] = route


def check_all_invariants(priv_key: PrivKeyEd25519, codec: Codec):
    """
    Run all invariant checks for a key and the codec it is encoded with.

    Raises:
        InvariantViolationError: If any invariant is violated
    """
    validate_codec(codec)
    validate_public_half(priv_key)
    pub_key = priv_key.pub_key()
    validate_address_binding(pub_key.address(), pub_key)

    # Round trip through the capability must land on the same key
    decoded = codec.unmarshal_binary_bare(codec.marshal_binary_bare(priv_key), PrivKey)
    if not decoded.equals(priv_key):
        raise InvariantViolationError("Private key does not survive a codec round trip")
