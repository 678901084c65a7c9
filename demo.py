from keyroute import (
    cdc,
    gen_priv_key_ed25519_from_secret,
    pub_key_from_bytes,
    signature_ed25519_from_bytes,
    to_json,
)
from keyroute.invariants import check_all_invariants

print("--- keyroute Live Demo ---")

# 1. Deterministic key from a secret
key = gen_priv_key_ed25519_from_secret(b"correct horse battery staple")
again = gen_priv_key_ed25519_from_secret(b"correct horse battery staple")
print(f"[+] Key from secret: {key!r}")
print(f"    - Regenerated identical: {key.equals(again)}")

# 2. Sign and verify
pub = key.pub_key()
sig = key.sign(b"hello")
print(f"[+] Signature: {sig}")
print(f"    - verify('hello'): {pub.verify_bytes(b'hello', sig)}")
print(f"    - verify('hellx'): {pub.verify_bytes(b'hellx', sig)}")

# 3. Child keys
print(f"[+] derive(0) stable: {key.derive(0).equals(key.derive(0))}")
print(f"    derive(0) != derive(1): {not key.derive(0).equals(key.derive(1))}")

# 4. Routed encoding
encoded = pub.to_bytes()
decoded = pub_key_from_bytes(encoded)
print(f"[+] Encoded {pub}: {encoded.hex().upper()}")
print(f"    - Address: {pub.address()}")
print(f"    - Decoded address matches: {decoded.address() == pub.address()}")
print(f"    - JSON: {to_json(pub).decode('utf-8')}")

# 5. Signature from short bytes
short = signature_ed25519_from_bytes(bytes([1, 2, 3]))
print(f"[+] Padded signature: {short.raw[:4].hex()}... zero={short.is_zero()}")

check_all_invariants(key, cdc)
print("--- Demo Complete ---")
