"""
Merkle Tree and Inclusion Proofs

This package provides:
- MerkleTree: immutable binary tree over ordered data blocks
- Proof / HashDirection: ordered (direction, sibling hash) path
- verify_proof: tree-independent proof verification
- Functional API: construct, root, verify, prove, verify_proof

Usage:
    from binmerkle.merkle import construct, prove, verify_proof

    data = [b"\\x00", b"\\x01", b"\\x02", b"\\x03"]
    tree = construct(data)

    proof = prove(tree, b"\\x02")
    assert verify_proof(b"\\x02", proof, tree.root())
"""
from __future__ import annotations

from typing import Optional, Sequence

from .merkle_proofs import (
    HashDirection,
    Proof,
    ProofEntry,
    compute_root_from_proof,
    verify_proof,
)
from .merkle_tree import (
    MerkleTree,
    OddLevelPolicy,
    build_levels,
    check_input_shape,
    compute_tree_depth,
    is_power_of_two,
)


def construct(data: Sequence[bytes]) -> MerkleTree:
    """Build a MerkleTree from a power-of-2 sequence of data blocks."""
    return MerkleTree.construct(data)


def root(tree: MerkleTree) -> bytes:
    """Root hash of tree."""
    return tree.root()


def verify(data: Sequence[bytes], root_hash: bytes) -> bool:
    """Rebuild a tree from data and compare its root to root_hash."""
    return MerkleTree.verify(data, root_hash)


def prove(tree: MerkleTree, data: bytes) -> Optional[Proof]:
    """Inclusion proof for data in tree, or None if absent."""
    return tree.prove(data)


__all__ = [
    # Core types
    "MerkleTree",
    "OddLevelPolicy",
    "HashDirection",
    "Proof",
    "ProofEntry",
    # Tree building
    "build_levels",
    "check_input_shape",
    "compute_tree_depth",
    "is_power_of_two",
    # Functional API
    "construct",
    "root",
    "verify",
    "prove",
    "verify_proof",
    "compute_root_from_proof",
]
