"""
InvocationResult - Normalized outcome of a sidebar call.

Every call through the Dispatcher ends in one of two variants:

    success: payload is the serialized operation result
    failure: payload is the serialized job envelope carrying `error`

Both payloads are JSON text the sidebar can decode; the variants differ only
in `ok`. Dispatcher.invoke maps the failure variant onto a raised JobFailure
for callers that expect the raise channel.
"""

import json
from dataclasses import dataclass
from typing import Any

from bulkbridge.errors import JobFailure


@dataclass(frozen=True)
class InvocationResult:
    """
    Outcome of one dispatched operation.

    Attributes:
        operation: The operation name that was requested
        ok: True for the success variant
        payload: JSON text (result on success, failed envelope on failure)
    """
    operation: str
    ok: bool
    payload: str

    @classmethod
    def success(cls, operation: str, payload: str) -> "InvocationResult":
        return cls(operation=operation, ok=True, payload=payload)

    @classmethod
    def failure(cls, operation: str, payload: str) -> "InvocationResult":
        return cls(operation=operation, ok=False, payload=payload)

    def value(self) -> Any:
        """Decode the payload."""
        return json.loads(self.payload)

    @property
    def error(self) -> dict[str, Any] | None:
        """The `error` field of a failure payload, None on success."""
        if self.ok:
            return None
        return self.value().get("error")

    def unwrap(self) -> str:
        """
        Return the success payload or raise the failure.

        Raises:
            JobFailure: For the failure variant, carrying the payload
        """
        if not self.ok:
            raise JobFailure(self.payload)
        return self.payload

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "ok": self.ok,
            "payload": self.value(),
        }
