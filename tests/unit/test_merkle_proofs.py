"""
Proof Verification Unit Tests
Tests for binmerkle/merkle/merkle_proofs.py

- Every leaf's proof verifies against the root
- Wrong root, tampered sibling, flipped direction, reordered,
  truncated and empty proofs all return False without raising
- Hand-built proofs verify without any tree
"""
import pytest

from binmerkle.crypto.hashing import sha256, hash_pair
from binmerkle.merkle import verify_proof
from binmerkle.merkle.merkle_proofs import (
    HashDirection,
    Proof,
    compute_root_from_proof,
)
from binmerkle.merkle.merkle_tree import MerkleTree

from conftest import example_data


def _flip(direction: HashDirection) -> HashDirection:
    return HashDirection.LEFT if direction is HashDirection.RIGHT else HashDirection.RIGHT


class TestProofType:
    """Tests for the Proof container."""

    def test_entries_normalized(self):
        """String directions and bytearrays are normalized."""
        proof = Proof(hashes=[("right", bytearray(b"\x01" * 32))])

        direction, sibling = proof.hashes[0]
        assert direction is HashDirection.RIGHT
        assert isinstance(sibling, bytes)

    def test_invalid_direction_rejected(self):
        with pytest.raises(ValueError):
            Proof(hashes=[("up", b"\x00" * 32)])

    def test_len_iter_and_accessors(self):
        a, b = sha256(b"a"), sha256(b"b")
        proof = Proof(hashes=[(HashDirection.RIGHT, a), (HashDirection.LEFT, b)])

        assert len(proof) == 2
        assert list(proof) == [(HashDirection.RIGHT, a), (HashDirection.LEFT, b)]
        assert proof.directions == [HashDirection.RIGHT, HashDirection.LEFT]
        assert proof.siblings == [a, b]

    def test_empty_proof_default(self):
        assert len(Proof()) == 0

    def test_proof_is_frozen(self):
        proof = Proof()

        with pytest.raises(AttributeError):
            proof.hashes = []

    def test_hashes_stored_as_tuple(self):
        proof = Proof(hashes=[(HashDirection.RIGHT, sha256(b"a"))])

        assert isinstance(proof.hashes, tuple)
        with pytest.raises(AttributeError):
            proof.hashes.append((HashDirection.LEFT, sha256(b"b")))

    def test_proof_is_hashable(self):
        """Equal proofs hash equally and can be used as set members."""
        a = Proof(hashes=[(HashDirection.RIGHT, sha256(b"a"))])
        b = Proof(hashes=[("right", bytearray(sha256(b"a")))])

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b, Proof()}) == 2

    def test_integer_sibling_rejected(self):
        with pytest.raises(TypeError, match="sibling"):
            Proof(hashes=[(HashDirection.RIGHT, 32)])


class TestVerifyProof:
    """Tests for verify_proof()."""

    @pytest.mark.parametrize("n", [1, 2, 4, 8, 16])
    def test_every_leaf_verifies(self, n):
        data = example_data(n)
        tree = MerkleTree.construct(data)

        for block in data:
            proof = tree.prove(block)
            assert verify_proof(block, proof, tree.root())
            assert MerkleTree.verify_proof(block, proof, tree.root())

    def test_index_two_against_wrong_root(self, data4):
        tree = MerkleTree.construct(data4)
        proof = tree.prove(bytes([2]))
        wrong_root = sha256(b"wrong root")

        assert verify_proof(bytes([2]), proof, tree.root())
        assert not verify_proof(bytes([2]), proof, wrong_root)

    def test_hand_built_two_leaf_proof(self):
        data = example_data(2)
        tree = MerkleTree.construct(data)

        proof = Proof(hashes=[(HashDirection.RIGHT, sha256(data[1]))])
        assert verify_proof(data[0], proof, tree.root())

    def test_hand_built_two_leaf_proof_wrong_direction(self):
        data = example_data(2)
        tree = MerkleTree.construct(data)

        proof = Proof(hashes=[(HashDirection.LEFT, sha256(data[1]))])
        assert not verify_proof(data[0], proof, tree.root())

    def test_hand_built_four_leaf_proof(self, data4):
        tree = MerkleTree.construct(data4)
        h0, h1, h3 = sha256(data4[0]), sha256(data4[1]), sha256(data4[3])

        proof = Proof(hashes=[
            (HashDirection.RIGHT, h3),
            (HashDirection.LEFT, hash_pair(h0, h1)),
        ])
        assert verify_proof(data4[2], proof, tree.root())

    def test_wrong_data_fails(self, data4):
        tree = MerkleTree.construct(data4)
        proof = tree.prove(data4[2])

        assert not verify_proof(data4[3], proof, tree.root())

    @pytest.mark.parametrize("position", range(3))
    def test_tampered_sibling_fails(self, data8, position):
        tree = MerkleTree.construct(data8)
        proof = tree.prove(data8[5])
        hashes = list(proof.hashes)
        direction, sibling = hashes[position]
        hashes[position] = (direction, bytes([sibling[0] ^ 0x01]) + sibling[1:])

        assert not verify_proof(data8[5], Proof(hashes=hashes), tree.root())

    @pytest.mark.parametrize("position", range(3))
    def test_flipped_direction_fails(self, data8, position):
        tree = MerkleTree.construct(data8)
        proof = tree.prove(data8[2])
        hashes = list(proof.hashes)
        direction, sibling = hashes[position]
        hashes[position] = (_flip(direction), sibling)

        assert not verify_proof(data8[2], Proof(hashes=hashes), tree.root())

    def test_reordered_proof_fails(self, data8):
        tree = MerkleTree.construct(data8)
        proof = tree.prove(data8[3])

        reordered = Proof(hashes=list(reversed(proof.hashes)))
        assert not verify_proof(data8[3], reordered, tree.root())

    def test_truncated_proof_fails(self, data8):
        tree = MerkleTree.construct(data8)
        proof = tree.prove(data8[0])

        truncated = Proof(hashes=proof.hashes[:-1])
        assert not verify_proof(data8[0], truncated, tree.root())

    def test_empty_proof_fails_for_multi_leaf_tree(self, data4):
        tree = MerkleTree.construct(data4)

        assert not verify_proof(data4[0], Proof(), tree.root())

    def test_empty_proof_single_leaf(self):
        """With one leaf, the empty proof replays to hash(data)."""
        assert verify_proof(b"only", Proof(), sha256(b"only"))

    def test_integer_data_rejected(self, data4):
        """ints are refused rather than hashed as zero-filled buffers."""
        tree = MerkleTree.construct(data4)
        proof = tree.prove(data4[1])

        with pytest.raises(TypeError):
            verify_proof(1, proof, tree.root())
        with pytest.raises(TypeError, match="root_hash"):
            verify_proof(data4[1], proof, 0)

    def test_compute_root_from_proof(self, data4):
        tree = MerkleTree.construct(data4)

        assert compute_root_from_proof(data4[1], tree.prove(data4[1])) == tree.root()
