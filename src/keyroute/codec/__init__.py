"""Routed binary and JSON codec."""

from .registry import Codec, ConcreteInfo
from .binary import route_prefix, encode_struct

__all__ = [
    'Codec',
    'ConcreteInfo',
    'route_prefix',
    'encode_struct',
]
