"""
binmerkle - binary Merkle trees with compact inclusion proofs.

    from binmerkle import MerkleTree

    tree = MerkleTree.construct([b"a", b"b", b"c", b"d"])
    proof = tree.prove(b"c")
    assert MerkleTree.verify_proof(b"c", proof, tree.root())
"""

__version__ = "0.1.0"

from binmerkle.crypto import DEFAULT_HASHER, Hasher, Sha256Hasher
from binmerkle.merkle import (
    HashDirection,
    MerkleTree,
    OddLevelPolicy,
    Proof,
    construct,
    prove,
    root,
    verify,
    verify_proof,
)
from binmerkle.schemas import InvalidInputShapeException, MerkleException

__all__ = [
    "__version__",
    "DEFAULT_HASHER",
    "Hasher",
    "Sha256Hasher",
    "HashDirection",
    "MerkleTree",
    "OddLevelPolicy",
    "Proof",
    "construct",
    "prove",
    "root",
    "verify",
    "verify_proof",
    "InvalidInputShapeException",
    "MerkleException",
]
