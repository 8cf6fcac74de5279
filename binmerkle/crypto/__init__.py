"""
Cryptographic utilities.

The tree only depends on the Hasher boundary defined here.
"""
from .hashing import (
    Hasher,
    Sha256Hasher,
    DEFAULT_HASHER,
    SUPPORTED_HASH_ALGORITHMS,
    get_hasher,
    sha256,
    ensure_bytes,
    hash_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "Hasher",
    "Sha256Hasher",
    "DEFAULT_HASHER",
    "SUPPORTED_HASH_ALGORITHMS",
    "get_hasher",
    "sha256",
    "ensure_bytes",
    "hash_pair",
    "to_hex",
    "from_hex",
]
