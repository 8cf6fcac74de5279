"""
Crypto - Hashing Utilities
Hash function boundary and hex helpers for Merkle commitments.

This module provides:
- Hasher: the single capability the tree depends on (hash, hash_pair)
- Sha256Hasher: the fixed SHA-256 implementation
- Module-level sha256 / hash_pair helpers bound to the default hasher
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Raw bytes are hashed exactly as given; no padding or domain separation
- hash_pair concatenates left then right, no delimiter, so parent
  hashes depend on child order
"""
from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any


class Hasher(ABC):
    """
    Abstract hash function used by the tree.

    Tree code only ever calls hash() and hash_pair(); swapping the
    digest means providing another subclass.
    """

    name: str = ""
    digest_size: int = 0

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        """Digest raw bytes."""

    def hash_pair(self, left: bytes, right: bytes) -> bytes:
        """
        Hash the concatenation of two child hashes.

        parent = hash(left + right)

        Args:
            left: Left child hash
            right: Right child hash

        Returns:
            Parent hash
        """
        return self.hash(left + right)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class Sha256Hasher(Hasher):
    """SHA-256 hasher (32-byte digests)."""

    name = "sha256"
    digest_size = 32

    def hash(self, data: bytes) -> bytes:
        return hashlib.sha256(data).digest()


DEFAULT_HASHER: Hasher = Sha256Hasher()

SUPPORTED_HASH_ALGORITHMS: frozenset[str] = frozenset({DEFAULT_HASHER.name})


def get_hasher(algorithm: str = "sha256") -> Hasher:
    """
    Look up a hasher by algorithm name.

    Raises:
        UnsupportedHashAlgorithmException: If the name is not supported
    """
    if algorithm != DEFAULT_HASHER.name:
        from binmerkle.schemas.errors import UnsupportedHashAlgorithmException
        raise UnsupportedHashAlgorithmException(algorithm, SUPPORTED_HASH_ALGORITHMS)
    return DEFAULT_HASHER


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return DEFAULT_HASHER.hash(data)


def ensure_bytes(value: Any, name: str = "data") -> bytes:
    """
    Return value as immutable bytes.

    Only bytes-like buffers are accepted; bytes(int) would silently
    produce a zero-filled buffer.

    Raises:
        TypeError: If value is not bytes, bytearray or memoryview
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise TypeError(
        f"{name} must be bytes, bytearray or memoryview, got {type(value).__name__}"
    )


def hash_pair(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences with the default hasher.

    Args:
        left: Left child hash (typically 32 bytes)
        right: Right child hash (typically 32 bytes)

    Returns:
        32-byte SHA-256 digest of left + right
    """
    return DEFAULT_HASHER.hash_pair(left, right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
