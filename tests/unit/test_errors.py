"""
Error Taxonomy Unit Tests
Tests for merkledrop/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from merkledrop.schemas.errors import (
    AlreadyClaimedException,
    ClaimRejectedException,
    ConfigException,
    DropError,
    DropException,
    EmptyTreeException,
    ErrorCode,
    GateNotSatisfiedException,
    InvalidEntryException,
    InvalidProofException,
    LeafNotFoundException,
    TransferFailedException,
    WindowClosedException,
)


class TestClaimRejections:
    """Tests for the claim-time exception family."""

    @pytest.mark.parametrize("exc_type,code", [
        (GateNotSatisfiedException, ErrorCode.GATE_NOT_SATISFIED),
        (AlreadyClaimedException, ErrorCode.ALREADY_CLAIMED),
        (WindowClosedException, ErrorCode.WINDOW_CLOSED),
        (InvalidProofException, ErrorCode.INVALID_PROOF),
        (TransferFailedException, ErrorCode.TRANSFER_FAILED),
    ])
    def test_each_rejection_has_its_code(self, exc_type, code):
        exc = exc_type("rejected", index=3, claimant="0xabc")

        assert isinstance(exc, ClaimRejectedException)
        assert isinstance(exc, DropException)
        assert exc.code == code
        assert exc.kind == code
        assert exc.details == {"index": 3, "claimant": "0xabc"}
        assert exc.retryable is False

    def test_details_merge(self):
        exc = WindowClosedException("late", index=0, details={"deadline": 10.0})

        assert exc.details == {"deadline": 10.0, "index": 0}

    def test_message_is_str(self):
        exc = AlreadyClaimedException("Index 1 has already been claimed")

        assert str(exc) == "Index 1 has already been claimed"
        assert "ALREADY_CLAIMED" in repr(exc)


class TestOtherExceptions:
    """Tests for builder and setup exceptions."""

    def test_leaf_not_found(self):
        exc = LeafNotFoundException("missing", leaf="0x00")

        assert exc.code == ErrorCode.LEAF_NOT_FOUND
        assert exc.details == {"leaf": "0x00"}

    def test_empty_tree_default_message(self):
        exc = EmptyTreeException()

        assert exc.code == ErrorCode.EMPTY_TREE
        assert "zero leaves" in exc.message

    def test_invalid_entry_field_path(self):
        exc = InvalidEntryException("bad", field_path="claimant")

        assert exc.code == ErrorCode.INVALID_ENTRY
        assert exc.details == {"field_path": "claimant"}

    def test_config(self):
        assert ConfigException("bad").code == ErrorCode.CONFIG_ERROR


class TestDropErrorModel:
    """Tests for conversion between exceptions and DropError."""

    def test_exception_to_model(self):
        exc = InvalidProofException("no match", index=7)

        model = exc.to_error_model()

        assert model.code == ErrorCode.INVALID_PROOF
        assert model.message == "no match"
        assert model.details == {"index": 7}
        assert model.model_dump(mode="json")["code"] == "INVALID_PROOF"

    def test_model_to_exception_picks_subclass(self):
        model = DropError(code=ErrorCode.TRANSFER_FAILED, message="refused", details={"index": 1})

        exc = model.to_exception()

        assert isinstance(exc, TransferFailedException)
        assert exc.code == ErrorCode.TRANSFER_FAILED
        assert exc.details == {"index": 1}
        with pytest.raises(TransferFailedException):
            raise exc

    def test_model_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            DropError(code=ErrorCode.EMPTY_TREE, message="x", severity="high")

    def test_code_accepts_string(self):
        model = DropError(code="WINDOW_CLOSED", message="late")

        assert model.code is ErrorCode.WINDOW_CLOSED
