"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for the hash tree engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every condition here is deterministic: the same inputs always produce the
same failure, so nothing is ever marked retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Tree structure errors
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"
    SHAPE_MISMATCH = "SHAPE_MISMATCH"
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Hashing & serialization errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Lets host programs report engine failures (e.g. as CLI JSON output)
    without passing exception objects around.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_BOUNDS],
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

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    This exception carries structured error information and can be
    converted to/from HashTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class IndexOutOfBoundsException(HashTreeException, IndexError):
    """Raised when a proof is requested for a leaf position outside level 0."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_BOUNDS,
            details=full_details,
            retryable=False,
        )


class ShapeMismatchException(HashTreeException, ValueError):
    """Raised when two trees of different depth are merged, or a level is not a power of two."""

    def __init__(
        self,
        message: str,
        left_levels: int | None = None,
        right_levels: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if left_levels is not None:
            full_details["left_levels"] = left_levels
        if right_levels is not None:
            full_details["right_levels"] = right_levels
        super().__init__(
            message=message,
            code=ErrorCodes.SHAPE_MISMATCH,
            details=full_details,
            retryable=False,
        )


class MalformedProofException(HashTreeException, ValueError):
    """Raised when a proof does not match the shape of the tree it is checked against."""

    def __init__(
        self,
        message: str,
        expected_length: int | None = None,
        actual_length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_length is not None:
            full_details["expected_length"] = expected_length
        if actual_length is not None:
            full_details["actual_length"] = actual_length
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(HashTreeException):
    """Exception raised when canonical serialization of an item fails."""

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


class UnknownHashAlgorithmException(HashTreeException, ValueError):
    """Exception raised when a hash algorithm name is not registered."""

    def __init__(
        self,
        algorithm: str,
        available: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if available is not None:
            details["available"] = available
        super().__init__(
            message=f"Unknown hash algorithm: {algorithm}",
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details=details,
            retryable=False,
        )


class ConfigurationException(HashTreeException):
    """Exception raised when configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "IndexOutOfBoundsException",
    "ShapeMismatchException",
    "MalformedProofException",
    "CanonicalizationException",
    "UnknownHashAlgorithmException",
    "ConfigurationException",
]
