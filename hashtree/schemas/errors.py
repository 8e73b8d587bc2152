"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for hashing and Merkle tree operations.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Digest Errors
    ENCODING_ERROR = "ENCODING_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Merkle & Proof Errors
    NOT_FOUND = "NOT_FOUND"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    LEAF_NOT_IN_PROOF = "LEAF_NOT_IN_PROOF"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to be reported or serialized rather than
    raised, e.g. when collecting verification results for many proofs.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """
        Convert this error model to a raised exception.

        Known codes map back to their exception subclass, so the model of a
        NotFoundException converts back to a NotFoundException. Unknown
        codes give a plain MerkleException.
        """
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code)
        if exc_type is None:
            return MerkleException(
                code=self.code,
                message=self.message,
                details=dict(self.details),
                retryable=self.retryable,
            )

        exc = exc_type(message=self.message, details=dict(self.details))
        exc.retryable = self.retryable
        return exc


class VerificationError(MerkleError):
    """Error model for a proof that failed verification."""

    code: str = Field(default=ErrorCodes.ROOT_MISMATCH)
    expected_root: str | None = Field(
        default=None,
        description="Hex of the published root the proof was checked against",
    )
    actual_root: str | None = Field(
        default=None,
        description="Hex of the root recomputed from the proof tree",
    )

    def to_exception(self) -> "MerkleException":
        exc = super().to_exception()
        if self.expected_root:
            exc.details.setdefault("expected_root", self.expected_root)
        if self.actual_root:
            exc.details.setdefault("actual_root", self.actual_root)
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all hashtree errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EncodingException(MerkleException):
    """Exception raised when data cannot be converted to bytes for hashing."""

    def __init__(
        self,
        message: str,
        encoding: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if encoding:
            full_details["encoding"] = encoding
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_ERROR,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(MerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class NotFoundException(MerkleException):
    """Exception raised when a proof is requested for data not in the tree."""

    def __init__(
        self,
        message: str,
        digest_hex: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if digest_hex:
            full_details["digest"] = digest_hex
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class RootMismatchException(MerkleException):
    """Exception raised when a proof tree does not hash to the published root."""

    def __init__(
        self,
        message: str,
        expected_root: str | None = None,
        actual_root: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_root:
            full_details["expected_root"] = expected_root
        if actual_root:
            full_details["actual_root"] = actual_root
        super().__init__(
            message=message,
            code=ErrorCodes.ROOT_MISMATCH,
            details=full_details,
            retryable=False,
        )

    def to_error_model(self) -> VerificationError:
        return VerificationError(
            message=self.message,
            details=self.details,
            expected_root=self.details.get("expected_root"),
            actual_root=self.details.get("actual_root"),
        )


class LeafNotInProofException(MerkleException):
    """Exception raised when the claimed data's digest is absent from a proof tree."""

    def __init__(
        self,
        message: str,
        digest_hex: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if digest_hex:
            full_details["digest"] = digest_hex
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_IN_PROOF,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(MerkleException):
    """Exception raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[MerkleException]] = {
    ErrorCodes.ENCODING_ERROR: EncodingException,
    ErrorCodes.CANONICALIZATION_ERROR: CanonicalizationException,
    ErrorCodes.NOT_FOUND: NotFoundException,
    ErrorCodes.ROOT_MISMATCH: RootMismatchException,
    ErrorCodes.LEAF_NOT_IN_PROOF: LeafNotInProofException,
    ErrorCodes.CONFIGURATION_ERROR: ConfigurationException,
}
