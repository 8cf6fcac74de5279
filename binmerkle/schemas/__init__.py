"""
Schemas: error taxonomy and the serialized proof document.
"""

# Error models and exceptions
from .errors import (
    ConfigurationException,
    ErrorCodes,
    InvalidInputShapeException,
    MerkleError,
    MerkleException,
    ProofDecodeException,
    UnsupportedHashAlgorithmException,
)

# Proof document
from .proof import (
    SCHEMA_VERSION,
    ProofDocument,
    ProofStep,
    load_proof_document,
)

__all__ = [
    "ConfigurationException",
    "ErrorCodes",
    "InvalidInputShapeException",
    "MerkleError",
    "MerkleException",
    "ProofDecodeException",
    "UnsupportedHashAlgorithmException",
    "SCHEMA_VERSION",
    "ProofDocument",
    "ProofStep",
    "load_proof_document",
]
