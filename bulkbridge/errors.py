"""
Error classes for bulkbridge job execution.

These error types let the sidebar tell failures apart:
- TransientError: Safe to retry from the UI (quota, network, temporary failures)
- PermanentError: Do not retry (invalid job, unknown entity, missing resources)

Operations and loaders raise these errors; anything else raised by a
collaborator propagates unchanged. The Dispatcher catches at the boundary
and turns the failure into a serialized job envelope carrying an `error`.
"""


class BulkbridgeError(Exception):
    """Base exception for bulkbridge."""
    pass


class TransientError(BulkbridgeError):
    """
    Transient error - safe to retry.

    Examples:
    - API quota exceeded
    - Network timeout
    - Service temporarily unavailable
    """
    pass


class PermanentError(BulkbridgeError):
    """
    Permanent error - do not retry.

    Examples:
    - Job envelope missing a required field
    - Unknown entity or operation name
    - Authorization failed (403)
    """
    pass


class InvalidJobError(PermanentError):
    """Job envelope failed validation at the dispatch boundary."""
    pass


class UnknownOperationError(PermanentError):
    """No operation registered under the requested name."""
    pass


class UnknownEntityError(PermanentError):
    """No loader registered for the requested entity tag."""
    pass


class OperationTableError(BulkbridgeError):
    """The operation table is missing caller-facing operations."""
    pass


class JobFailure(BulkbridgeError):
    """
    Raised by Dispatcher.invoke when an operation fails.

    The payload is the serialized job envelope, including the `error`
    field and any fields the operation set before failing.
    """

    def __init__(self, payload: str):
        super().__init__(payload)
        self.payload = payload
