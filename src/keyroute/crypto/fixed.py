"""
Immutable fixed-size byte values.
"""

from ..errors import InvalidKeyError


class FixedBytes:
    """
    Immutable fixed-size byte value.

    Subclasses set SIZE and may set ERROR to the exception raised on a
    size mismatch. Equality goes through ``equals`` so subclasses can
    choose constant-time comparison.
    """

    __slots__ = ('_data',)

    SIZE = 0
    ERROR = InvalidKeyError

    def __init__(self, data: bytes):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise self.ERROR(f"{type(self).__name__} expects bytes, got {type(data).__name__}")
        data = bytes(data)
        if len(data) != self.SIZE:
            raise self.ERROR(
                f"{type(self).__name__} must be {self.SIZE} bytes, got {len(data)}"
            )
        object.__setattr__(self, '_data', data)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._data,))

    @property
    def raw(self) -> bytes:
        """Raw fixed-size bytes, without any route framing."""
        return self._data

    def hex(self) -> str:
        return self._data.hex()

    def equals(self, other) -> bool:
        return type(other) is type(self) and self._data == other._data

    def __eq__(self, other):
        if not isinstance(other, FixedBytes):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((type(self), self._data))

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return self.SIZE
