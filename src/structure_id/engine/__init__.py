"""Fingerprinting engine: classification, bit registry, traversal, signatures."""

from .classify import MISSING, OpaquePolicy, TypeTag, classify
from .collisions import CollisionCounter
from .identity_cache import IdentityCache
from .registry import BitRegistry
from .signature import build_structure_signature, format_structure_id
from .traversal import LevelSums, traverse

__all__ = [
    "BitRegistry",
    "CollisionCounter",
    "IdentityCache",
    "LevelSums",
    "MISSING",
    "OpaquePolicy",
    "TypeTag",
    "build_structure_signature",
    "classify",
    "format_structure_id",
    "traverse",
]
