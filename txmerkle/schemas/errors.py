"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for txmerkle.
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

    # Input & lifecycle errors
    INVALID_INPUT = "INVALID_INPUT"
    NOT_BUILT = "NOT_BUILT"

    # Merkle & commitment errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    PROOF_FORMAT_ERROR = "PROOF_FORMAT_ERROR"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class TxMerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI to report failures as JSON without a traceback.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_INPUT],
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

    def to_exception(self) -> "TxMerkleException":
        """Convert this error model to a raised exception."""
        return TxMerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class TxMerkleException(Exception):
    """
    Base exception for all txmerkle errors.

    Carries structured error information and can be converted
    to/from TxMerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "TXMERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> TxMerkleError:
        """Convert this exception to a TxMerkleError model."""
        return TxMerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputError(TxMerkleException):
    """Raised when construction receives missing, empty or unusable leaves."""

    def __init__(
        self,
        message: str = "no leaves supplied",
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INPUT,
            details=full_details,
            retryable=False,
        )


class NotBuiltError(TxMerkleException):
    """Raised when a query or diagnostic runs before any tree was built."""

    def __init__(
        self,
        message: str = "merkle tree has not been built; call build_root() first",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_BUILT,
            details=details,
            retryable=False,
        )


class MerkleVerificationException(TxMerkleException):
    """Raised when a tree's layers do not reproduce its own root."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.MERKLE_PROOF_INVALID,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class ProofFormatException(TxMerkleException):
    """Raised when a proof document cannot be parsed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_ERROR,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(TxMerkleException):
    """Raised for invalid configuration files or values."""

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
