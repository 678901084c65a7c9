"""
Binary framing primitives for routed encodings.

Routed values are written as ``prefix || uvarint(len) || raw``. The 4-byte
prefix is derived from the route string: SHA-256 of the route, leading zero
bytes skipped, 3 disambiguation bytes, leading zero bytes skipped again,
then 4 prefix bytes.

Structs are written as a sequence of ``key || value`` fields where
``key = uvarint(field_number << 3 | typ3)``. Fields holding their default
value are omitted.
"""

from typing import Tuple

from ..config import (
    DISAMBIGUATION_LENGTH,
    MAX_UVARINT_LENGTH,
    PREFIX_LENGTH,
    TYP3_BYTE_LENGTH,
    TYP3_VARINT,
)
from ..errors import DecodeError
from ..utils.hashing import sha256

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


def route_prefix(route: str) -> bytes:
    """
    Derive the 4 prefix bytes written in front of a routed value.

    Args:
        route: Route string, e.g. "tendermint/PubKeyEd25519"

    Returns:
        4 prefix bytes
    """
    bz = sha256(route.encode('utf-8')).lstrip(b'\x00')
    # Skip the disambiguation bytes
    bz = bz[DISAMBIGUATION_LENGTH:].lstrip(b'\x00')
    return bz[:PREFIX_LENGTH]


# ==================== Varints ====================

def encode_uvarint(value: int) -> bytes:
    if value < 0 or value > _UINT64_MAX:
        raise ValueError(f"uvarint out of range: {value}")

    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_uvarint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Read an unsigned varint.

    Args:
        data: Encoded bytes
        offset: Position to start reading at

    Returns:
        (value, offset just past the varint)

    Raises:
        DecodeError: If the varint is truncated, overflows 64 bits or is
            written with more bytes than needed
    """
    value = 0
    shift = 0
    for i in range(MAX_UVARINT_LENGTH):
        pos = offset + i
        if pos >= len(data):
            raise DecodeError("Truncated uvarint")
        byte = data[pos]
        value |= (byte & 0x7F) << shift
        if byte < 0x80:
            if value > _UINT64_MAX:
                raise DecodeError("uvarint overflows 64 bits")
            if i > 0 and byte == 0x00:
                raise DecodeError("Non-canonical uvarint")
            return value, pos + 1
        shift += 7
    raise DecodeError("uvarint overflows 64 bits")


def encode_varint(value: int) -> bytes:
    """Encode a signed 64-bit integer as a zig-zag varint."""
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"varint out of range: {value}")
    zigzag = value << 1 if value >= 0 else ((-value) << 1) - 1
    return encode_uvarint(zigzag)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    zigzag, offset = decode_uvarint(data, offset)
    value = zigzag >> 1
    if zigzag & 1:
        value = -value - 1
    return value, offset


# ==================== Byte slices ====================

def encode_byte_slice(data: bytes) -> bytes:
    return encode_uvarint(len(data)) + bytes(data)


def decode_byte_slice(data: bytes, offset: int = 0) -> Tuple[bytes, int]:
    """
    Read a length-prefixed byte slice.

    Returns:
        (slice, offset just past the slice)

    Raises:
        DecodeError: If the declared length runs past the end of data
    """
    length, offset = decode_uvarint(data, offset)
    end = offset + length
    if end > len(data):
        raise DecodeError(
            f"Byte slice declares {length} bytes, only {len(data) - offset} available"
        )
    return bytes(data[offset:end]), end


# ==================== Struct fields ====================

def field_key(field_number: int, typ3: int) -> bytes:
    if field_number < 1:
        raise ValueError(f"Field numbers start at 1, got {field_number}")
    return encode_uvarint((field_number << 3) | typ3)


def encode_struct(*fields) -> bytes:
    """
    Encode struct fields in declaration order.

    Each field is its value; field numbers are assigned 1, 2, ... in order.
    bytes values use the byte-length wire type and int values the zig-zag
    varint wire type. Empty bytes and zero ints are omitted.

    Raises:
        TypeError: If a field has an unsupported type
    """
    out = bytearray()
    for number, value in enumerate(fields, start=1):
        if isinstance(value, bool):
            raise TypeError(f"Unsupported struct field type: {type(value)}")
        if isinstance(value, (bytes, bytearray)):
            if value:
                out += field_key(number, TYP3_BYTE_LENGTH) + encode_byte_slice(value)
        elif isinstance(value, int):
            if value:
                out += field_key(number, TYP3_VARINT) + encode_varint(value)
        else:
            raise TypeError(f"Unsupported struct field type: {type(value)}")
    return bytes(out)
