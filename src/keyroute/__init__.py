"""
keyroute - Routed Ed25519 identity keys

Fixed-size private keys, public keys and signatures with a canonical,
self-describing encoding, plus the short addresses derived from public keys.

Main exports:
- PrivKeyEd25519, PubKeyEd25519, SignatureEd25519: Ed25519 value types
- gen_priv_key_ed25519, gen_priv_key_ed25519_from_secret: key generation
- Address: 20-byte public key identifier
- priv_key_from_bytes, pub_key_from_bytes, signature_from_bytes: generic decoders
"""

from .crypto import (
    Address,
    PrivKey,
    PubKey,
    Signature,
    PrivKeyEd25519,
    PubKeyEd25519,
    SignatureEd25519,
    gen_priv_key_ed25519,
    gen_priv_key_ed25519_from_secret,
    signature_ed25519_from_bytes,
    cdc,
    priv_key_from_bytes,
    pub_key_from_bytes,
    signature_from_bytes,
    to_json,
    priv_key_from_json,
    pub_key_from_json,
    signature_from_json,
)
from .errors import *
from .config import *

__version__ = "0.1.0"

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
    'priv_key_from_bytes',
    'pub_key_from_bytes',
    'signature_from_bytes',
    'to_json',
    'priv_key_from_json',
    'pub_key_from_json',
    'signature_from_json',
]
