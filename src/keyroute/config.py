"""
Configuration constants for keyroute.
These are immutable system constants, not runtime configuration.
"""

# Cryptographic constants
HASH_ALGORITHM = "sha256"
SEED_SIZE = 32
PRIV_KEY_ED25519_SIZE = 64  # seed || public half
PUB_KEY_ED25519_SIZE = 32
SIGNATURE_ED25519_SIZE = 64

# Address constants
ADDRESS_SIZE = 20  # Truncated SHA-256 of the raw public key
ADDRESS_HEX_LENGTH = ADDRESS_SIZE * 2

# Routes; changing any of these changes every canonical encoding
ED25519_PRIV_KEY_ROUTE = "tendermint/PrivKeyEd25519"
ED25519_PUB_KEY_ROUTE = "tendermint/PubKeyEd25519"
ED25519_SIGNATURE_ROUTE = "tendermint/SignatureEd25519"

# Binary framing
PREFIX_LENGTH = 4
DISAMBIGUATION_LENGTH = 3
MAX_UVARINT_LENGTH = 10  # 64-bit varint

# Field wire types for struct encoding
TYP3_VARINT = 0
TYP3_BYTE_LENGTH = 2

# Canonical JSON settings
JSON_SEPARATORS = (',', ':')  # No whitespace
JSON_SORT_KEYS = True
JSON_ENSURE_ASCII = False

# Signature fingerprint shown in str()
FINGERPRINT_LENGTH = 6
