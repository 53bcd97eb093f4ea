"""
Sidebar dispatch - the single entry point for sidebar calls.

This module provides the dispatch layer between the sidebar and the
operations in bulkbridge.operations:
1. Safe-parses the raw payload into a job (goToTab gets the raw text)
2. Maps the operation name to its handler via an explicit table
3. Serializes the handler's return value

Error handling contract:
- Operations and collaborators raise; nothing is caught below this layer
- Dispatcher.call never raises: it returns an InvocationResult whose payload
  is always a decodable envelope (the failed job carries `error`)
- Dispatcher.invoke returns the success payload or raises JobFailure
  carrying the failure payload
- No retries; a failed call is attempted exactly once
"""

import logging
from typing import Any, Mapping, Optional

from bulkbridge.envelope import safe_parse, serialize, serialize_failure
from bulkbridge.errors import OperationTableError, UnknownOperationError
from bulkbridge.operations import Operation, OperationFn, default_operations
from bulkbridge.result import InvocationResult
from bulkbridge.services import BridgeServices

logger = logging.getLogger(__name__)

_RAW_INPUT_OPERATIONS = frozenset(op.value for op in Operation if op.takes_raw_input)


class Dispatcher:
    """
    Dispatches sidebar calls to operations by name.

    Usage:
        dispatcher = Dispatcher(BridgeServices.in_memory())

        # Raise channel: returns result text or raises JobFailure
        text = dispatcher.invoke("initializeJob", "{}")

        # Result channel: never raises
        result = dispatcher.call("writeLogs", payload)
        if not result.ok:
            print(result.error)
    """

    def __init__(
        self,
        services: BridgeServices,
        operations: Optional[Mapping[str, OperationFn]] = None,
    ) -> None:
        """
        Args:
            services: Collaborators handed to every operation
            operations: Operation table keyed by wire name; defaults to
                bulkbridge.operations.default_operations()

        Raises:
            OperationTableError: If a sidebar operation has no handler
        """
        self.services = services
        self._operations: dict[str, OperationFn] = dict(
            operations if operations is not None else default_operations()
        )

        missing = [op.value for op in Operation if op.value not in self._operations]
        if missing:
            raise OperationTableError(f"No handler registered for operation(s): {missing}")

        not_callable = [name for name, fn in self._operations.items() if not callable(fn)]
        if not_callable:
            raise OperationTableError(f"Handlers are not callable: {not_callable}")

    def list_operations(self) -> list[str]:
        return list(self._operations.keys())

    def get(self, name: str) -> OperationFn:
        """
        Get the handler for an operation name.

        Raises:
            UnknownOperationError: If the name is not in the table
        """
        fn = self._operations.get(name)
        if fn is None:
            raise UnknownOperationError(f"Unknown operation: {name}")
        return fn

    def call(self, name: str, raw_input: Any = None) -> InvocationResult:
        """
        Run one operation and return its outcome as an InvocationResult.

        Args:
            name: Operation wire name (e.g. "cmLoad")
            raw_input: JSON text, a bare string, or an already-decoded value

        Returns:
            Success with the serialized result, or failure with the
            serialized job carrying `error`
        """
        job = None
        try:
            job = self._decode(name, raw_input)
            fn = self.get(name)
            return InvocationResult.success(name, serialize(fn(job, self.services)))
        except Exception as e:
            logger.error(f"{name} failed: {e}", exc_info=True, extra={"operation": name})
            return InvocationResult.failure(name, serialize_failure(job, e))

    @staticmethod
    def _decode(name: str, raw_input: Any) -> Any:
        if name in _RAW_INPUT_OPERATIONS:
            return raw_input
        return safe_parse(raw_input)

    def invoke(self, name: str, raw_input: Any = None) -> str:
        """
        Run one operation, returning its serialized result.

        Raises:
            JobFailure: If the operation fails; `payload` is the serialized job
                with an `error` field
        """
        return self.call(name, raw_input).unwrap()
