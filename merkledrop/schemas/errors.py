"""
Error taxonomy for the Merkle commitment and claim subsystem.

Defines both Pydantic models for structured error communication
and Python exceptions for control flow. Every claim rejection carries
a machine-readable ErrorCode so callers branch on kind, not on text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable)
# =============================================================================

class ErrorCode(str, Enum):
    """Stable machine-readable error codes."""

    # Claim-time rejections
    GATE_NOT_SATISFIED = "GATE_NOT_SATISFIED"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    WINDOW_CLOSED = "WINDOW_CLOSED"
    INVALID_PROOF = "INVALID_PROOF"
    TRANSFER_FAILED = "TRANSFER_FAILED"

    # Offline tree builder
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    EMPTY_TREE = "EMPTY_TREE"
    INVALID_ENTRY = "INVALID_ENTRY"

    # Setup
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class DropError(BaseModel):
    """
    Structured error passed across module boundaries without raising.

    Used by the CLI's --json output and by callers that collect
    rejections instead of propagating them.
    """

    model_config = ConfigDict(extra="forbid")

    code: ErrorCode = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the core itself would retry (it never does)",
    )

    def to_exception(self) -> "DropException":
        """Convert this error model to the matching exception type."""
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code, DropException)
        exc = exc_type.__new__(exc_type)
        DropException.__init__(
            exc,
            message=self.message,
            code=self.code,
            details=dict(self.details),
            retryable=self.retryable,
        )
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class DropException(Exception):
    """
    Base exception for all merkledrop errors.

    Carries structured error information and converts to/from
    DropError models.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    @property
    def kind(self) -> ErrorCode:
        return self.code

    def to_error_model(self) -> DropError:
        """Convert this exception to a DropError model."""
        return DropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value!r}, message={self.message!r})"


class ClaimRejectedException(DropException):
    """Base for every claim-time rejection. No rejection mutates state."""

    code_default: ErrorCode = ErrorCode.INVALID_PROOF

    def __init__(
        self,
        message: str,
        index: int | None = None,
        claimant: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if claimant is not None:
            full_details["claimant"] = claimant
        super().__init__(
            message=message,
            code=self.code_default,
            details=full_details,
            retryable=False,
        )


class GateNotSatisfiedException(ClaimRejectedException):
    """Claimant does not hold the required external credential."""

    code_default = ErrorCode.GATE_NOT_SATISFIED


class AlreadyClaimedException(ClaimRejectedException):
    """The index's claim bit is already set."""

    code_default = ErrorCode.ALREADY_CLAIMED


class WindowClosedException(ClaimRejectedException):
    """Current time is at or past the campaign deadline."""

    code_default = ErrorCode.WINDOW_CLOSED


class InvalidProofException(ClaimRejectedException):
    """Recomputed root differs from the published root."""

    code_default = ErrorCode.INVALID_PROOF


class TransferFailedException(ClaimRejectedException):
    """The token ledger refused the payout; the claim was voided."""

    code_default = ErrorCode.TRANSFER_FAILED


class LeafNotFoundException(DropException):
    """Proof requested for a leaf absent from the tree."""

    def __init__(self, message: str, leaf: str | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.LEAF_NOT_FOUND,
            details={"leaf": leaf} if leaf else {},
        )


class EmptyTreeException(DropException):
    """A tree cannot be built from zero entries."""

    def __init__(self, message: str = "Cannot build a Merkle tree from zero leaves") -> None:
        super().__init__(message=message, code=ErrorCode.EMPTY_TREE)


class InvalidEntryException(DropException):
    """An allow-list entry does not satisfy the encoding constraints."""

    def __init__(self, message: str, field_path: str | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_ENTRY,
            details={"field_path": field_path} if field_path else {},
        )


class ConfigException(DropException):
    """Campaign or runtime configuration is unusable."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code=ErrorCode.CONFIG_ERROR, details=details)


_EXCEPTIONS_BY_CODE: dict[ErrorCode, type[DropException]] = {
    ErrorCode.GATE_NOT_SATISFIED: GateNotSatisfiedException,
    ErrorCode.ALREADY_CLAIMED: AlreadyClaimedException,
    ErrorCode.WINDOW_CLOSED: WindowClosedException,
    ErrorCode.INVALID_PROOF: InvalidProofException,
    ErrorCode.TRANSFER_FAILED: TransferFailedException,
    ErrorCode.LEAF_NOT_FOUND: LeafNotFoundException,
    ErrorCode.EMPTY_TREE: EmptyTreeException,
    ErrorCode.INVALID_ENTRY: InvalidEntryException,
    ErrorCode.CONFIG_ERROR: ConfigException,
}
