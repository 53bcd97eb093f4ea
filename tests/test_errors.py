"""Tests for bulkbridge error classes.

Tests cover:
- TransientError and PermanentError hierarchy
- Validation errors are permanent
- JobFailure carries its payload
"""

import json

import pytest
from bulkbridge.errors import (
    BulkbridgeError,
    InvalidJobError,
    JobFailure,
    OperationTableError,
    PermanentError,
    TransientError,
    UnknownEntityError,
    UnknownOperationError,
)


class TestBulkbridgeError:
    """Tests for base BulkbridgeError."""

    def test_is_exception(self):
        assert issubclass(BulkbridgeError, Exception)

    def test_has_message(self):
        error = BulkbridgeError("my message")
        assert str(error) == "my message"


class TestErrorClassification:
    """Tests for classifying different error types."""

    def test_transient_not_permanent(self):
        error = TransientError("quota exceeded")
        assert isinstance(error, BulkbridgeError)
        assert not isinstance(error, PermanentError)

    def test_permanent_not_transient(self):
        error = PermanentError("bad input")
        assert isinstance(error, BulkbridgeError)
        assert not isinstance(error, TransientError)

    @pytest.mark.parametrize("cls", [InvalidJobError, UnknownOperationError, UnknownEntityError])
    def test_validation_errors_are_permanent(self, cls):
        assert issubclass(cls, PermanentError)

    def test_operation_table_error_is_not_permanent(self):
        """A broken operation table is a setup error, not a job error."""
        assert issubclass(OperationTableError, BulkbridgeError)
        assert not issubclass(OperationTableError, PermanentError)


class TestJobFailure:
    """Tests for the JobFailure raised by Dispatcher.invoke."""

    def test_carries_payload(self):
        payload = json.dumps({"entity": "Ad", "error": {"type": "ValueError", "message": "x"}})
        failure = JobFailure(payload)
        assert failure.payload == payload
        assert str(failure) == payload

    def test_can_be_caught_as_bulkbridge_error(self):
        with pytest.raises(BulkbridgeError):
            raise JobFailure("{}")
