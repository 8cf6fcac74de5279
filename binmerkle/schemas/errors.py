"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error codes and exceptions for tree construction,
proof decoding and configuration.

Verification mismatches are NOT errors: verify() and verify_proof()
return False, and prove() returns None for data that is not a leaf.
Exceptions here are reserved for malformed input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction
    INVALID_INPUT_SHAPE = "INVALID_INPUT_SHAPE"

    # Proof documents
    PROOF_DECODE_ERROR = "PROOF_DECODE_ERROR"
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"

    # Configuration
    CONFIG_INVALID = "CONFIG_INVALID"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Structured error model.

    Used by collaborators (CLI, callers embedding the library) to report
    failures without carrying exception objects around.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_INPUT_SHAPE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raisable exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all binmerkle errors.

    Carries structured error information and can be converted to a
    MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputShapeException(MerkleException):
    """Raised when tree input is empty or its length is not allowed by the policy."""

    def __init__(
        self,
        message: str,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INPUT_SHAPE,
            details=full_details,
        )


class ProofDecodeException(MerkleException):
    """Raised when a serialized proof document cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_DECODE_ERROR,
            details=details,
        )


class UnsupportedHashAlgorithmException(MerkleException):
    """Raised when a document or config names a hash algorithm we do not implement."""

    def __init__(
        self,
        algorithm: str,
        supported: frozenset[str] | None = None,
    ) -> None:
        supported = supported or frozenset({"sha256"})
        super().__init__(
            message=(
                f"Unsupported hash algorithm: '{algorithm}'. "
                f"Supported algorithms: {sorted(supported)}"
            ),
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details={"algorithm": algorithm, "supported": sorted(supported)},
        )


class ConfigurationException(MerkleException):
    """Raised when a configuration value is invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_INVALID,
            details=full_details,
        )


__all__ = [
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "InvalidInputShapeException",
    "ProofDecodeException",
    "UnsupportedHashAlgorithmException",
    "ConfigurationException",
]
