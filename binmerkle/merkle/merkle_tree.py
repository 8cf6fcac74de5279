"""
Merkle - Tree Construction
Binary Merkle tree over an ordered list of data blocks.

This module provides:
- build_levels: bottom-up level construction from raw data
- MerkleTree: immutable tree exposing root(), verify(), prove()
- OddLevelPolicy: what to do when a level has an odd number of nodes
- compute_tree_depth: level count for a given leaf count

Commitment Rules:
1. Leaf hashing: leaf = hasher.hash(data)
2. Parent hashing: parent = hasher.hash_pair(left, right) = hash(left + right)
3. Input shape: non-empty, power-of-2 length (STRICT, the default).
   PROMOTE carries an odd trailing node up unchanged; DUPLICATE pairs
   it with itself. Empty input is rejected under every policy.
4. Single leaf: root = leaf hash, proofs are empty

Determinism Notes:
- Leaf order is the caller's order; nothing is sorted
- Duplicate data blocks resolve to the first matching leaf in prove()
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from binmerkle.crypto.hashing import DEFAULT_HASHER, Hasher, ensure_bytes
from binmerkle.merkle.merkle_proofs import HashDirection, Proof, verify_proof as _verify_proof
from binmerkle.schemas.errors import InvalidInputShapeException

if TYPE_CHECKING:
    from binmerkle.config.runtime import TreeConfig


logger = logging.getLogger(__name__)


class OddLevelPolicy(str, Enum):
    """Handling of levels with an odd number of nodes."""
    STRICT = "strict"
    PROMOTE = "promote"
    DUPLICATE = "duplicate"


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def check_input_shape(leaf_count: int, policy: OddLevelPolicy) -> None:
    """
    Enforce the construction precondition.

    Raises:
        InvalidInputShapeException: If leaf_count is 0, or not a power
            of 2 under the STRICT policy
    """
    if leaf_count == 0:
        logger.warning("Rejected Merkle tree input: no data blocks")
        raise InvalidInputShapeException(
            "Cannot build a Merkle tree from empty input",
            leaf_count=0,
        )
    if policy is OddLevelPolicy.STRICT and not is_power_of_two(leaf_count):
        logger.warning(f"Rejected Merkle tree input: {leaf_count} blocks is not a power of 2")
        raise InvalidInputShapeException(
            f"Leaf count must be a power of 2, got {leaf_count}",
            leaf_count=leaf_count,
            details={"policy": policy.value},
        )


def build_levels(
    data: Sequence[bytes],
    hasher: Hasher = DEFAULT_HASHER,
    policy: OddLevelPolicy = OddLevelPolicy.STRICT,
) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first.

    Algorithm:
    1. Hash each data block: level 0
    2. Pair adjacent nodes (even, odd) and hash_pair them into the next level
    3. Repeat until a level of length 1 (the root)

    Example with 4 blocks:
        Level 0: [h0, h1, h2, h3]
        Level 1: [hp(h0,h1), hp(h2,h3)]
        Level 2: [hp(hp(h0,h1), hp(h2,h3))]  <- root

    Args:
        data: Ordered data blocks
        hasher: Hash function
        policy: Odd-level handling (see OddLevelPolicy)

    Returns:
        List of levels; levels[0] are leaf hashes, levels[-1] == [root]

    Raises:
        InvalidInputShapeException: If the input shape violates the policy
    """
    check_input_shape(len(data), policy)

    current_level: list[bytes] = [hasher.hash(ensure_bytes(block)) for block in data]
    levels: list[list[bytes]] = [current_level]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(hasher.hash_pair(current_level[i], current_level[i + 1]))

        if len(current_level) % 2 == 1:
            last = current_level[-1]
            if policy is OddLevelPolicy.DUPLICATE:
                next_level.append(hasher.hash_pair(last, last))
            else:
                next_level.append(last)

        levels.append(next_level)
        current_level = next_level

    return levels


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels (leaves and root inclusive) for num_leaves leaves.

    A single leaf has depth 1, two leaves depth 2, four leaves depth 3.
    Odd levels round up, matching PROMOTE and DUPLICATE construction.
    Returns 0 for an empty tree.
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


class MerkleTree:
    """
    Immutable binary Merkle tree.

    All levels are retained after construction so root() is a lookup
    and prove() is a walk over stored hashes. Instances are never
    mutated and may be shared between threads for reading.

    Example:
        >>> tree = MerkleTree.construct([b"\\x00", b"\\x01", b"\\x02", b"\\x03"])
        >>> proof = tree.prove(b"\\x02")
        >>> MerkleTree.verify_proof(b"\\x02", proof, tree.root())
        True
    """

    __slots__ = ("_levels", "_hasher", "_policy")

    def __init__(
        self,
        levels: Sequence[Sequence[bytes]],
        hasher: Hasher = DEFAULT_HASHER,
        policy: OddLevelPolicy = OddLevelPolicy.STRICT,
    ) -> None:
        if not levels or len(levels[-1]) != 1:
            raise ValueError("Tree levels must end with a single root hash")
        expected_depth = compute_tree_depth(len(levels[0]))
        if len(levels) != expected_depth:
            raise ValueError(
                f"Tree with {len(levels[0])} leaves must have {expected_depth} levels, "
                f"got {len(levels)}"
            )
        self._levels: tuple[tuple[bytes, ...], ...] = tuple(tuple(level) for level in levels)
        self._hasher = hasher
        self._policy = policy

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def construct(
        cls,
        data: Sequence[bytes],
        hasher: Optional[Hasher] = None,
        policy: Optional[OddLevelPolicy] = None,
    ) -> "MerkleTree":
        """
        Build a tree from ordered data blocks.

        Args:
            data: Non-empty sequence of data blocks
            hasher: Hash function (default SHA-256)
            policy: Odd-level handling (default STRICT: power-of-2 only)

        Returns:
            The constructed tree

        Raises:
            InvalidInputShapeException: Empty input, or a non-power-of-2
                length under STRICT
        """
        hasher = hasher or DEFAULT_HASHER
        policy = OddLevelPolicy(policy) if policy is not None else OddLevelPolicy.STRICT

        levels = build_levels(data, hasher, policy)
        tree = cls(levels, hasher, policy)
        logger.debug(
            f"Built Merkle tree: {tree.leaf_count} leaves, depth {tree.depth}, "
            f"policy={policy.value}, hasher={hasher.name}"
        )
        return tree

    @classmethod
    def from_config(cls, data: Sequence[bytes], config: "TreeConfig") -> "MerkleTree":
        """Build a tree using the hasher and odd-level policy from a TreeConfig."""
        return cls.construct(data, hasher=config.hasher(), policy=config.odd_level_policy)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def root(self) -> bytes:
        """Root hash of the tree."""
        return self._levels[-1][0]

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """All levels, leaves first."""
        return self._levels

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self._levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root inclusive."""
        return len(self._levels)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def policy(self) -> OddLevelPolicy:
        return self._policy

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={self.leaf_count}, depth={self.depth}, "
            f"root={self.root().hex()[:16]}...)"
        )

    # ------------------------------------------------------------------
    # Dataset verification
    # ------------------------------------------------------------------

    @staticmethod
    def verify(
        data: Sequence[bytes],
        root_hash: bytes,
        hasher: Optional[Hasher] = None,
        policy: Optional[OddLevelPolicy] = None,
    ) -> bool:
        """
        Check that a full dataset produces root_hash.

        Rebuilds the tree from scratch; no proofs are involved.

        Raises:
            InvalidInputShapeException: If data violates the construction
                precondition
        """
        tree = MerkleTree.construct(data, hasher=hasher, policy=policy)
        return tree.root() == ensure_bytes(root_hash, "root_hash")

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def leaf_index(self, data: bytes) -> Optional[int]:
        """Index of the first leaf whose hash matches data, or None."""
        target = self._hasher.hash(ensure_bytes(data))
        for index, leaf in enumerate(self._levels[0]):
            if leaf == target:
                return index
        return None

    def prove(self, data: bytes) -> Optional[Proof]:
        """
        Build an inclusion proof for a data block.

        The block is re-hashed and looked up among the leaves; when the
        same block appears more than once, the first occurrence is proved.

        Args:
            data: Raw data block

        Returns:
            Proof with one entry per level below the root, or None if
            data is not a leaf of this tree
        """
        index = self.leaf_index(data)
        if index is None:
            logger.debug("Proof requested for data not present in tree")
            return None
        return self.prove_index(index)

    def prove_index(self, index: int) -> Proof:
        """
        Build an inclusion proof for the leaf at index.

        Algorithm, for each level below the root:
        - sibling index = index XOR 1
        - even index: sibling sits on the RIGHT; odd index: on the LEFT
        - index = index // 2

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= self.leaf_count:
            raise IndexError(
                f"Leaf index {index} out of range for {self.leaf_count} leaves"
            )

        hashes: list[tuple[HashDirection, bytes]] = []
        current_index = index

        for level in self._levels[:-1]:
            sibling_index = current_index ^ 1
            if sibling_index < len(level):
                direction = HashDirection.RIGHT if current_index % 2 == 0 else HashDirection.LEFT
                hashes.append((direction, level[sibling_index]))
            elif self._policy is OddLevelPolicy.DUPLICATE:
                # Lone trailing node was paired with itself
                hashes.append((HashDirection.RIGHT, level[current_index]))
            # PROMOTE: node moved up unchanged, nothing to record

            current_index = current_index // 2

        logger.debug(f"Built proof for leaf {index}: {len(hashes)} entries")
        return Proof(hashes=hashes)

    @staticmethod
    def verify_proof(
        data: bytes,
        proof: Proof,
        root_hash: bytes,
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """Verify a proof against a root. See merkle_proofs.verify_proof."""
        return _verify_proof(data, proof, root_hash, hasher or DEFAULT_HASHER)


__all__ = [
    "OddLevelPolicy",
    "MerkleTree",
    "is_power_of_two",
    "check_input_shape",
    "build_levels",
    "compute_tree_depth",
]
