"""
Domain-specific exceptions for keyroute.
All exceptions are explicit and carry meaningful context.
"""


class KeyrouteError(Exception):
    """Base exception for all keyroute errors."""
    pass


class CryptoError(KeyrouteError):
    """Base exception for key and signature errors."""
    pass


class InvalidKeyError(CryptoError):
    """Raised when key or address material has the wrong shape."""
    pass


class SignatureError(CryptoError):
    """Raised when a signature cannot be built or produced."""
    pass


class CodecError(KeyrouteError):
    """Base exception for codec errors."""
    pass


class RegistrationError(CodecError):
    """Raised when the codec registry is misconfigured."""
    pass


class RouteConflictError(RegistrationError):
    """Raised when two concrete types of one capability share a route or prefix."""
    pass


class UnregisteredTypeError(CodecError):
    """Raised when encoding a value whose type has no route."""
    pass


class DecodeError(CodecError):
    """Raised when encoded bytes cannot be decoded."""
    pass


class UnregisteredRouteError(DecodeError):
    """Raised when encoded bytes carry a route unknown to the capability."""
    pass


class InvariantViolationError(KeyrouteError):
    """Raised when a core key invariant is violated."""
    pass
