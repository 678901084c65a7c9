"""Key, signature and address types."""

from .address import Address
from .interfaces import PrivKey, PubKey, Signature
from .ed25519 import (
    PrivKeyEd25519,
    PubKeyEd25519,
    SignatureEd25519,
    gen_priv_key_ed25519,
    gen_priv_key_ed25519_from_secret,
    signature_ed25519_from_bytes,
)
from .encoding import (
    cdc,
    new_codec,
    priv_key_from_bytes,
    pub_key_from_bytes,
    signature_from_bytes,
    to_json,
    priv_key_from_json,
    pub_key_from_json,
    signature_from_json,
)

__all__ = [
    'Address',
    'PrivKey',
    'PubKey',
    'Signature',
    'PrivKeyEd25519',
    'PubKeyEd25519',
    'SignatureEd25519',
    'gen_priv_key_ed25519',
    'gen_priv_key_ed25519_from_secret',
    'signature_ed25519_from_bytes',
    'cdc',
    'new_codec',
    'priv_key_from_bytes',
    'pub_key_from_bytes',
    'signature_from_bytes',
    'to_json',
    'priv_key_from_json',
    'pub_key_from_json',
    'signature_from_json',
]
