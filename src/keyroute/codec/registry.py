"""
Routed codec registry.

Maps each capability (an abstract interface such as PubKey) to the set of
concrete types implementing it, each tagged with a unique route. A value
typed only by its capability can be encoded and later decoded back to its
exact concrete type.

The registry is populated once, then sealed. After sealing it is read-only
and safe for concurrent readers.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict

from ..config import PREFIX_LENGTH
from ..errors import (
    DecodeError,
    InvariantViolationError,
    RegistrationError,
    RouteConflictError,
    UnregisteredRouteError,
    UnregisteredTypeError,
)
from ..logger import get_logger
from ..utils.canonical_json import canonicalize_bytes, parse
from .binary import decode_byte_slice, encode_byte_slice, route_prefix

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConcreteInfo:
    """Registration record of one concrete type."""
    cls: type
    route: str
    prefix: bytes
    size: int


def _check_conflict(iface: type, table: Dict[str, ConcreteInfo], info: ConcreteInfo):
    for other in table.values():
        if other.route == info.route:
            raise RouteConflictError(
                f"Route {info.route!r} of {info.cls.__name__} already used by "
                f"{other.cls.__name__} in {iface.__name__}"
            )
        if other.prefix == info.prefix:
            raise RouteConflictError(
                f"Prefix {info.prefix.hex().upper()} of route {info.route!r} collides "
                f"with route {other.route!r} in {iface.__name__}"
            )


class Codec:
    """
    Registry of capabilities and their routed concrete types.

    Concrete types must expose a class attribute ``SIZE`` (fixed raw length),
    a ``raw`` property returning exactly ``SIZE`` bytes, and accept the raw
    bytes as their only constructor argument.
    """

    def __init__(self):
        self._interfaces: Dict[type, Dict[str, ConcreteInfo]] = {}
        self._concretes: Dict[type, ConcreteInfo] = {}
        self._sealed = False

    # ==================== Registration ====================

    def register_interface(self, iface: type):
        """
        Register a capability.

        Already registered concrete types implementing it are filed under it.

        Raises:
            RegistrationError: If sealed or already registered
            RouteConflictError: If filed concrete types collide
        """
        self._check_open()
        if iface in self._interfaces:
            raise RegistrationError(f"Interface {iface.__name__} already registered")

        table: Dict[str, ConcreteInfo] = {}
        for info in self._concretes.values():
            if issubclass(info.cls, iface):
                _check_conflict(iface, table, info)
                table[info.route] = info
        self._interfaces[iface] = table
        logger.debug("registered interface %s", iface.__name__)

    def register_concrete(self, cls: type, route: str):
        """
        Register a concrete type under a route.

        Args:
            cls: Concrete value type
            route: Stable route string

        Raises:
            RegistrationError: If sealed, the type is already registered,
                the route is empty or the type has no fixed size
            RouteConflictError: If the route or its prefix is already used
                within one of the type's capabilities
        """
        self._check_open()
        if not route:
            raise RegistrationError("Route must be a non-empty string")
        if cls in self._concretes:
            raise RegistrationError(f"Type {cls.__name__} already registered")

        size = getattr(cls, 'SIZE', None)
        if not isinstance(size, int) or size <= 0:
            raise RegistrationError(f"Type {cls.__name__} must declare a positive SIZE")

        prefix = route_prefix(route)
        info = ConcreteInfo(cls=cls, route=route, prefix=prefix, size=size)

        # Check every capability first so a conflict leaves no partial state
        capabilities = [iface for iface in self._interfaces if issubclass(cls, iface)]
        for iface in capabilities:
            _check_conflict(iface, self._interfaces[iface], info)

        self._concretes[cls] = info
        for iface in capabilities:
            self._interfaces[iface][route] = info
        logger.debug("registered concrete %s as %s", cls.__name__, route)

    def seal(self):
        """Freeze the registry. Further registration raises RegistrationError."""
        self._sealed = True
        logger.debug(
            "codec sealed with %d interfaces, %d concrete types",
            len(self._interfaces),
            len(self._concretes),
        )

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_open(self):
        if self._sealed:
            raise RegistrationError("Codec is sealed; registration is closed")

    # ==================== Lookup ====================

    def routes(self, iface: type) -> Dict[str, type]:
        """
        Get the route table of a capability.

        Returns:
            Mapping of route to concrete type (a copy)
        """
        return {route: info.cls for route, info in self._lookup_interface(iface).items()}

    def info_for(self, cls: type) -> ConcreteInfo:
        """
        Get the registration record of a concrete type.

        Raises:
            UnregisteredTypeError: If the type is not registered
        """
        try:
            return self._concretes[cls]
        except KeyError:
            raise UnregisteredTypeError(f"Type {cls.__name__} has no registered route")

    def _lookup_interface(self, iface: type) -> Dict[str, ConcreteInfo]:
        try:
            return self._interfaces[iface]
        except KeyError:
            raise UnregisteredTypeError(f"Interface {iface.__name__} is not registered")

    def _raw_of(self, value: Any, info: ConcreteInfo) -> bytes:
        raw = bytes(value.raw)
        if len(raw) != info.size:
            raise InvariantViolationError(
                f"{info.cls.__name__} holds {len(raw)} bytes, expected {info.size}"
            )
        return raw

    # ==================== Binary ====================

    def marshal_binary_bare(self, value: Any) -> bytes:
        """
        Encode a value as ``prefix || uvarint(len) || raw``.

        Raises:
            UnregisteredTypeError: If the value's type has no route
        """
        info = self.info_for(type(value))
        return info.prefix + encode_byte_slice(self._raw_of(value, info))

    def unmarshal_binary_bare(self, data: bytes, iface: type) -> Any:
        """
        Decode bytes into the concrete type registered under a capability.

        Args:
            data: Encoded bytes
            iface: Capability the value must implement

        Returns:
            Instance of the concrete type named by the prefix

        Raises:
            UnregisteredRouteError: If the prefix is unknown to the capability
            DecodeError: If the payload is truncated, has the wrong length
                or is followed by trailing bytes
        """
        table = self._lookup_interface(iface)
        data = bytes(data)
        if len(data) < PREFIX_LENGTH:
            raise DecodeError(f"Encoded {iface.__name__} too short: {len(data)} bytes")

        prefix = data[:PREFIX_LENGTH]
        info = next((i for i in table.values() if i.prefix == prefix), None)
        if info is None:
            raise UnregisteredRouteError(
                f"No {iface.__name__} registered for prefix {prefix.hex().upper()}"
            )

        raw, end = decode_byte_slice(data, PREFIX_LENGTH)
        if len(raw) != info.size:
            raise DecodeError(
                f"{info.cls.__name__} payload must be {info.size} bytes, got {len(raw)}"
            )
        if end != len(data):
            raise DecodeError(f"{len(data) - end} trailing bytes after {info.cls.__name__}")
        return info.cls(raw)

    # ==================== JSON ====================

    def marshal_json(self, value: Any) -> bytes:
        """
        Encode a value as canonical JSON ``{"type": route, "value": base64(raw)}``.

        Raises:
            UnregisteredTypeError: If the value's type has no route
        """
        info = self.info_for(type(value))
        raw = self._raw_of(value, info)
        return canonicalize_bytes({
            'type': info.route,
            'value': base64.b64encode(raw).decode('ascii'),
        })

    def unmarshal_json(self, data: Any, iface: type) -> Any:
        """
        Decode routed JSON into the concrete type registered under a capability.

        Raises:
            UnregisteredRouteError: If the route is unknown to the capability
            DecodeError: If the document is malformed or the payload has the
                wrong length
        """
        table = self._lookup_interface(iface)
        try:
            doc = parse(data)
        except ValueError as e:
            raise DecodeError(str(e))

        if not isinstance(doc, dict):
            raise DecodeError(f"Expected JSON object, got {type(doc).__name__}")
        route = doc.get('type')
        value = doc.get('value')
        if not isinstance(route, str) or not isinstance(value, str):
            raise DecodeError("Routed JSON needs string 'type' and 'value' fields")

        info = table.get(route)
        if info is None:
            raise UnregisteredRouteError(f"No {iface.__name__} registered for route {route!r}")

        try:
            raw = base64.b64decode(value.encode('ascii'), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise DecodeError(f"Invalid base64 payload: {e}")

        if len(raw) != info.size:
            raise DecodeError(
                f"{info.cls.__name__} payload must be {info.size} bytes, got {len(raw)}"
            )
        return info.cls(raw)
