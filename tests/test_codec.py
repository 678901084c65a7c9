"""
Tests for the routed codec.
"""

import json
import logging

import pytest

from keyroute import (
    PrivKeyEd25519,
    PubKeyEd25519,
    SignatureEd25519,
    cdc,
    gen_priv_key_ed25519,
    priv_key_from_bytes,
    priv_key_from_json,
    pub_key_from_bytes,
    pub_key_from_json,
    signature_from_bytes,
    signature_from_json,
    to_json,
)
from keyroute.codec import Codec, route_prefix
from keyroute.codec.binary import (
    decode_byte_slice,
    decode_uvarint,
    decode_varint,
    encode_struct,
    encode_uvarint,
    encode_varint,
)
from keyroute.config import (
    ED25519_PRIV_KEY_ROUTE,
    ED25519_PUB_KEY_ROUTE,
    ED25519_SIGNATURE_ROUTE,
)
from keyroute.crypto import PrivKey, PubKey, Signature, new_codec
from keyroute.errors import (
    DecodeError,
    RegistrationError,
    RouteConflictError,
    UnregisteredRouteError,
    UnregisteredTypeError,
)


class TestBinaryFraming:
    """Test varint and slice framing."""

    def test_uvarint_values(self):
        assert encode_uvarint(0) == b"\x00"
        assert encode_uvarint(127) == b"\x7f"
        assert encode_uvarint(128) == b"\x80\x01"
        assert encode_uvarint(300) == b"\xac\x02"
        assert decode_uvarint(b"\xac\x02") == (300, 2)

    def test_varint_zigzag(self):
        assert encode_varint(0) == b"\x00"
        assert encode_varint(-1) == b"\x01"
        assert encode_varint(1) == b"\x02"
        assert encode_varint(-2) == b"\x03"
        assert decode_varint(encode_varint(-12345)) == (-12345, 3)

    def test_truncated_uvarint(self):
        with pytest.raises(DecodeError):
            decode_uvarint(b"\x80")
        with pytest.raises(DecodeError):
            decode_uvarint(b"")

    def test_overlong_uvarint(self):
        with pytest.raises(DecodeError):
            decode_uvarint(b"\xff" * 11)

    def test_padded_uvarint_rejected(self):
        """Test that a varint written with extra bytes is rejected."""
        with pytest.raises(DecodeError):
            decode_uvarint(b"\x80\x00")
        with pytest.raises(DecodeError):
            decode_uvarint(b"\xac\x82\x00")
        assert decode_uvarint(b"\x00") == (0, 1)

    def test_byte_slice_overrun(self):
        with pytest.raises(DecodeError):
            decode_byte_slice(b"\x05abc")

    def test_struct_encoding(self):
        """Test field keys and default-value omission."""
        assert encode_struct(b"\xaa", 1) == b"\x0a\x01\xaa\x10\x02"
        assert encode_struct(b"\xaa", 0) == b"\x0a\x01\xaa"
        assert encode_struct(b"", -1) == b"\x10\x01"

    def test_struct_rejects_unknown_types(self):
        with pytest.raises(TypeError):
            encode_struct(1.5)


class TestRoutePrefixes:
    """Test the canonical route prefixes."""

    def test_known_prefixes(self):
        assert route_prefix(ED25519_PUB_KEY_ROUTE).hex() == "1624de64"
        assert route_prefix(ED25519_PRIV_KEY_ROUTE).hex() == "a3288910"
        assert route_prefix(ED25519_SIGNATURE_ROUTE).hex() == "2031ea53"

    def test_pub_key_layout(self):
        pub = gen_priv_key_ed25519().pub_key()
        bz = pub.to_bytes()

        assert bz[:5].hex() == "1624de6420"
        assert bz[5:] == pub.raw
        assert len(bz) == 37

    def test_priv_key_layout(self):
        priv = gen_priv_key_ed25519()
        bz = priv.to_bytes()

        assert bz[:5].hex() == "a328891040"
        assert bz[5:] == priv.raw

    def test_signature_layout(self):
        sig = gen_priv_key_ed25519().sign(b"m")
        bz = sig.to_bytes()

        assert bz[:5].hex() == "2031ea5340"
        assert bz[5:] == sig.raw


class TestBinaryRoundTrip:
    """Test decoding through the capability interfaces."""

    def test_priv_key_round_trip(self):
        priv = gen_priv_key_ed25519()
        decoded = priv_key_from_bytes(priv.to_bytes())

        assert isinstance(decoded, PrivKeyEd25519)
        assert decoded.equals(priv)

    def test_pub_key_round_trip(self):
        pub = gen_priv_key_ed25519().pub_key()
        decoded = pub_key_from_bytes(pub.to_bytes())

        assert isinstance(decoded, PubKeyEd25519)
        assert decoded == pub
        assert decoded.address() == pub.address()

    def test_signature_round_trip(self):
        sig = gen_priv_key_ed25519().sign(b"m")
        decoded = signature_from_bytes(sig.to_bytes())

        assert isinstance(decoded, SignatureEd25519)
        assert decoded.equals(sig)

    def test_decoded_signature_verifies(self):
        priv = gen_priv_key_ed25519()
        pub = pub_key_from_bytes(priv.pub_key().to_bytes())
        sig = signature_from_bytes(priv.sign(b"m").to_bytes())

        assert pub.verify_bytes(b"m", sig)

    def test_wrong_capability_rejected(self):
        """Test that a public key cannot be decoded as a private key."""
        pub = gen_priv_key_ed25519().pub_key()

        with pytest.raises(UnregisteredRouteError):
            priv_key_from_bytes(pub.to_bytes())

    def test_unregistered_prefix_rejected(self):
        with pytest.raises(UnregisteredRouteError):
            pub_key_from_bytes(b"\x00\x00\x00\x00\x20" + bytes(32))

    def test_wrong_length_rejected(self):
        bz = route_prefix(ED25519_PUB_KEY_ROUTE) + b"\x1f" + bytes(31)

        with pytest.raises(DecodeError):
            pub_key_from_bytes(bz)

    def test_truncated_payload_rejected(self):
        pub = gen_priv_key_ed25519().pub_key()

        with pytest.raises(DecodeError):
            pub_key_from_bytes(pub.to_bytes()[:-1])

    def test_short_input_rejected(self):
        with pytest.raises(DecodeError):
            pub_key_from_bytes(b"\x16\x24")

    def test_trailing_bytes_rejected(self):
        pub = gen_priv_key_ed25519().pub_key()

        with pytest.raises(DecodeError):
            pub_key_from_bytes(pub.to_bytes() + b"\x00")

    def test_padded_length_rejected(self):
        """Test that only the minimal length encoding decodes."""
        pub = gen_priv_key_ed25519().pub_key()
        padded = route_prefix(ED25519_PUB_KEY_ROUTE) + b"\xa0\x00" + pub.raw

        with pytest.raises(DecodeError):
            pub_key_from_bytes(padded)

    def test_decoded_bytes_reencode_identically(self):
        """Test that every accepted encoding is the canonical one."""
        priv = gen_priv_key_ed25519()
        cases = [
            (priv.to_bytes(), PrivKey),
            (priv.pub_key().to_bytes(), PubKey),
            (priv.sign(b"m").to_bytes(), Signature),
        ]
        for bz, iface in cases:
            assert cdc.marshal_binary_bare(cdc.unmarshal_binary_bare(bz, iface)) == bz


class TestJSON:
    """Test routed JSON encoding."""

    def test_json_shape(self):
        pub = gen_priv_key_ed25519().pub_key()
        doc = json.loads(to_json(pub))

        assert doc["type"] == ED25519_PUB_KEY_ROUTE
        assert set(doc) == {"type", "value"}

    def test_json_canonical(self):
        pub = gen_priv_key_ed25519().pub_key()

        assert to_json(pub).startswith(b'{"type":')
        assert b" " not in to_json(pub)

    def test_json_round_trips(self):
        priv = gen_priv_key_ed25519()
        sig = priv.sign(b"m")

        assert priv_key_from_json(to_json(priv)).equals(priv)
        assert pub_key_from_json(to_json(priv.pub_key())) == priv.pub_key()
        assert signature_from_json(to_json(sig).decode("utf-8")).equals(sig)

    def test_json_unknown_route(self):
        doc = json.dumps({"type": "other/PubKey", "value": ""})

        with pytest.raises(UnregisteredRouteError):
            pub_key_from_json(doc)

    def test_json_malformed(self):
        with pytest.raises(DecodeError):
            pub_key_from_json("not json")
        with pytest.raises(DecodeError):
            pub_key_from_json("[1, 2]")
        with pytest.raises(DecodeError):
            pub_key_from_json(json.dumps({"type": ED25519_PUB_KEY_ROUTE}))
        with pytest.raises(DecodeError):
            pub_key_from_json(json.dumps({"type": ED25519_PUB_KEY_ROUTE, "value": "!!"}))

    def test_json_wrong_length(self):
        doc = json.dumps({"type": ED25519_PUB_KEY_ROUTE, "value": "AAAA"})

        with pytest.raises(DecodeError):
            pub_key_from_json(doc)


class TestRegistry:
    """Test codec registration rules."""

    def test_shared_codec_sealed(self):
        assert cdc.sealed
        with pytest.raises(RegistrationError):
            cdc.register_concrete(PubKeyEd25519, "other/PubKey")

    def test_routes_listed_per_capability(self):
        assert cdc.routes(PubKey) == {ED25519_PUB_KEY_ROUTE: PubKeyEd25519}
        assert cdc.routes(PrivKey) == {ED25519_PRIV_KEY_ROUTE: PrivKeyEd25519}
        assert cdc.routes(Signature) == {ED25519_SIGNATURE_ROUTE: SignatureEd25519}

    def test_route_conflict_rejected(self):
        """Test that two public key types cannot share a route."""

        class OtherPubKey(PubKeyEd25519):
            __slots__ = ()

        codec = Codec()
        codec.register_interface(PubKey)
        codec.register_concrete(PubKeyEd25519, ED25519_PUB_KEY_ROUTE)

        with pytest.raises(RouteConflictError):
            codec.register_concrete(OtherPubKey, ED25519_PUB_KEY_ROUTE)

    def test_conflict_found_when_interface_registered_late(self):
        class OtherPubKey(PubKeyEd25519):
            __slots__ = ()

        codec = Codec()
        codec.register_concrete(PubKeyEd25519, ED25519_PUB_KEY_ROUTE)
        codec.register_concrete(OtherPubKey, ED25519_PUB_KEY_ROUTE)

        with pytest.raises(RouteConflictError):
            codec.register_interface(PubKey)

    def test_same_route_across_capabilities_allowed(self):
        """Test that uniqueness is only required within one capability."""
        codec = Codec()
        codec.register_interface(PubKey)
        codec.register_interface(Signature)
        codec.register_concrete(PubKeyEd25519, "shared/Route")
        codec.register_concrete(SignatureEd25519, "shared/Route")

        assert codec.routes(PubKey) == {"shared/Route": PubKeyEd25519}
        assert codec.routes(Signature) == {"shared/Route": SignatureEd25519}

    def test_duplicate_type_rejected(self):
        codec = Codec()
        codec.register_concrete(PubKeyEd25519, ED25519_PUB_KEY_ROUTE)

        with pytest.raises(RegistrationError):
            codec.register_concrete(PubKeyEd25519, "other/PubKey")

    def test_empty_route_rejected(self):
        with pytest.raises(RegistrationError):
            Codec().register_concrete(PubKeyEd25519, "")

    def test_type_without_size_rejected(self):
        class Sizeless:
            pass

        with pytest.raises(RegistrationError):
            Codec().register_concrete(Sizeless, "test/Sizeless")

    def test_unregistered_type_encoding(self):
        codec = Codec()
        codec.register_interface(PubKey)

        with pytest.raises(UnregisteredTypeError):
            codec.marshal_binary_bare(gen_priv_key_ed25519().pub_key())

    def test_unregistered_interface_decoding(self):
        with pytest.raises(UnregisteredTypeError):
            Codec().unmarshal_binary_bare(b"\x00" * 8, PubKey)

    def test_new_codec_matches_shared(self):
        """Test that a freshly built codec encodes like the shared one."""
        codec = new_codec()
        pub = gen_priv_key_ed25519().pub_key()

        assert codec.marshal_binary_bare(pub) == pub.to_bytes()

    def test_registration_record(self):
        info = cdc.info_for(PubKeyEd25519)

        assert info.route == ED25519_PUB_KEY_ROUTE
        assert info.prefix == route_prefix(ED25519_PUB_KEY_ROUTE)
        assert info.size == 32

    def test_registration_logged(self, caplog):
        """Test that registration and sealing are logged at debug level."""
        caplog.set_level(logging.DEBUG)

        new_codec()

        messages = [
            record.getMessage()
            for record in caplog.records
            if record.name == "keyroute.codec.registry"
        ]
        assert "registered interface PubKey" in messages
        assert "registered concrete PubKeyEd25519 as " + ED25519_PUB_KEY_ROUTE in messages
        assert "codec sealed with 3 interfaces, 3 concrete types" in messages
