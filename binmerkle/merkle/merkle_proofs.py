"""
Merkle - Inclusion Proofs
Proof type and tree-independent proof verification.

A proof is the ordered list of sibling hashes needed to walk from one
leaf up to the root. Each entry is tagged with the side the sibling
occupies when concatenated with the hash carried upward:

    RIGHT: current = hash_pair(current, sibling)
    LEFT:  current = hash_pair(sibling, current)

Entries are applied leaf-to-root; reordering them invalidates the proof.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from binmerkle.crypto.hashing import DEFAULT_HASHER, Hasher, ensure_bytes


class HashDirection(str, Enum):
    """Which side a sibling hash is concatenated on."""
    LEFT = "left"
    RIGHT = "right"


ProofEntry = tuple[HashDirection, bytes]


@dataclass(frozen=True)
class Proof:
    """
    An inclusion proof for a single data block.

    Attributes:
        hashes: (direction, sibling hash) pairs, leaf level first.
                The proof owns its hashes; it does not reference the tree.
    """
    hashes: tuple[ProofEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Normalize entries to an immutable tuple of (HashDirection, bytes)."""
        normalized = tuple(
            (HashDirection(direction), ensure_bytes(sibling, "sibling"))
            for direction, sibling in self.hashes
        )
        object.__setattr__(self, "hashes", normalized)

    def __len__(self) -> int:
        return len(self.hashes)

    def __iter__(self) -> Iterator[ProofEntry]:
        return iter(self.hashes)

    @property
    def directions(self) -> list[HashDirection]:
        """Direction tags in application order."""
        return [direction for direction, _ in self.hashes]

    @property
    def siblings(self) -> list[bytes]:
        """Sibling hashes in application order."""
        return [sibling for _, sibling in self.hashes]


def compute_root_from_proof(
    data: bytes,
    proof: Proof,
    hasher: Hasher = DEFAULT_HASHER,
) -> bytes:
    """
    Replay a proof from a data block, returning the implied root.

    Args:
        data: Raw data block (not its hash)
        proof: Proof to replay
        hasher: Hash function the tree was built with

    Returns:
        The root hash the proof leads to
    """
    current = hasher.hash(ensure_bytes(data))
    for direction, sibling in proof.hashes:
        if direction is HashDirection.RIGHT:
            current = hasher.hash_pair(current, sibling)
        else:
            current = hasher.hash_pair(sibling, current)
    return current


def verify_proof(
    data: bytes,
    proof: Proof,
    root_hash: bytes,
    hasher: Hasher = DEFAULT_HASHER,
) -> bool:
    """
    Verify that data and proof reproduce root_hash.

    Pure function: needs no tree. A wrong, truncated or reordered
    proof is a normal False result, not an error.

    Args:
        data: Raw data block claimed to be in the tree
        proof: Sibling path from leaf to root
        root_hash: Known root to check against
        hasher: Hash function the tree was built with

    Returns:
        True if the replayed hash byte-equals root_hash
    """
    return compute_root_from_proof(data, proof, hasher) == ensure_bytes(root_hash, "root_hash")


__all__ = [
    "HashDirection",
    "ProofEntry",
    "Proof",
    "compute_root_from_proof",
    "verify_proof",
]
