"""
Schemas - Proof Document
File: proof.py

Purpose: JSON representation of an inclusion proof for collaborators
that need to hand a proof to someone else (the CLI, files on disk).

Step order is preserved exactly as produced; a verifier replays the
steps in list order.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from binmerkle.crypto.hashing import DEFAULT_HASHER, SUPPORTED_HASH_ALGORITHMS, from_hex, to_hex
from binmerkle.merkle.merkle_proofs import HashDirection, Proof
from .errors import ProofDecodeException, UnsupportedHashAlgorithmException

SCHEMA_VERSION: str = "v1"


def _validate_hex(value: str) -> str:
    # Reuse from_hex so documents follow the same rules as the rest of the code
    from_hex(value)
    return value.lower()


class ProofStep(BaseModel):
    """One (direction, sibling hash) entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    direction: Literal["left", "right"] = Field(
        ...,
        description="Side the sibling is concatenated on",
    )
    hash: str = Field(
        ...,
        description="Sibling hash, 0x-prefixed hex",
    )

    @field_validator("hash")
    @classmethod
    def check_hash_hex(cls, v: str) -> str:
        return _validate_hex(v)


class ProofDocument(BaseModel):
    """
    Serialized inclusion proof.

    The root is optional: a proof can be shipped on its own and
    checked against a root obtained elsewhere.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: Literal["v1"] = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(default=DEFAULT_HASHER.name)
    root: Optional[str] = Field(
        default=None,
        description="Root the proof was produced against, 0x-prefixed hex",
    )
    leaf_index: Optional[int] = Field(default=None, ge=0)
    steps: list[ProofStep] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def check_root_hex(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _validate_hex(v)

    @field_validator("hash_algorithm")
    @classmethod
    def check_algorithm(cls, v: str) -> str:
        if v not in SUPPORTED_HASH_ALGORITHMS:
            raise ValueError(
                f"Unsupported hash algorithm '{v}', expected one of {sorted(SUPPORTED_HASH_ALGORITHMS)}"
            )
        return v

    @classmethod
    def from_proof(
        cls,
        proof: Proof,
        root_hash: Optional[bytes] = None,
        leaf_index: Optional[int] = None,
        hash_algorithm: str = DEFAULT_HASHER.name,
    ) -> "ProofDocument":
        """Build a document from a Proof."""
        if hash_algorithm not in SUPPORTED_HASH_ALGORITHMS:
            raise UnsupportedHashAlgorithmException(hash_algorithm, SUPPORTED_HASH_ALGORITHMS)
        return cls(
            hash_algorithm=hash_algorithm,
            root=to_hex(root_hash) if root_hash is not None else None,
            leaf_index=leaf_index,
            steps=[
                ProofStep(direction=direction.value, hash=to_hex(sibling))
                for direction, sibling in proof.hashes
            ],
        )

    def to_proof(self) -> Proof:
        """Rebuild the Proof, preserving step order."""
        return Proof(
            hashes=[
                (HashDirection(step.direction), from_hex(step.hash))
                for step in self.steps
            ]
        )

    def root_bytes(self) -> Optional[bytes]:
        return from_hex(self.root) if self.root is not None else None

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(indent=indent, exclude_none=True)


def load_proof_document(data: str | bytes | dict[str, Any]) -> ProofDocument:
    """
    Parse a proof document from JSON text or a decoded dict.

    Raises:
        ProofDecodeException: If the document is malformed
    """
    try:
        if isinstance(data, dict):
            return ProofDocument.model_validate(data)
        return ProofDocument.model_validate_json(data)
    except ValidationError as e:
        raise ProofDecodeException(
            f"Invalid proof document: {e.error_count()} validation error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


__all__ = [
    "SCHEMA_VERSION",
    "ProofStep",
    "ProofDocument",
    "load_proof_document",
]
