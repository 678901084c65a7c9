"""Utility modules for keyroute."""

from . import canonical_json
from . import hashing

__all__ = ['canonical_json', 'hashing']
