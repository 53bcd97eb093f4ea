"""
Job envelope helpers.

The job envelope is the plain dict exchanged between the sidebar and every
operation. It crosses a text boundary on every call, so it must always be
JSON-serializable. Field names on the wire stay camelCase.

Known fields (all optional unless an operation requires them):
    entity, idsToLoad, parentItemIds, feed, feedItem, idMap,
    jobs, offset, jobId, sheetName, range, error
"""

import json
from typing import Any

from bulkbridge.errors import InvalidJobError, TransientError


def safe_parse(value: Any) -> Any:
    """
    Try to decode a JSON payload, returning the input itself when it is not JSON.

    The sidebar sends either a JSON document or a bare string such as a tab
    name, so a decode failure is not an error here.

    Args:
        value: Raw payload (text, bytes, or an already-decoded value)

    Returns:
        The decoded value, or ``value`` unchanged if it cannot be decoded
    """
    if not isinstance(value, (str, bytes, bytearray)):
        return value
    try:
        return json.loads(value)
    # RecursionError: nesting deeper than the decoder can follow
    except (ValueError, UnicodeDecodeError, RecursionError):
        return value


def serialize(value: Any) -> str:
    """Serialize an operation result for the sidebar."""
    return json.dumps(value)


def serialize_failure(job: Any, error: BaseException) -> str:
    """
    Build the failure payload for a job.

    The error is attached to the job in place when the job is a dict, so the
    payload carries every field set before the failure. Otherwise a minimal
    ``{"error": ...}`` envelope is produced.

    Values that cannot be serialized are rendered with ``str()``. A job that
    cannot be encoded at all (a reference cycle, or nesting too deep for the
    encoder) falls back to the minimal envelope.
    """
    error_data = error_to_dict(error)
    if not isinstance(job, dict):
        return json.dumps({"error": error_data})

    job["error"] = error_data
    try:
        return json.dumps(job, default=str)
    except (ValueError, RecursionError):
        return json.dumps({"error": error_data})


def error_to_dict(error: BaseException) -> dict[str, Any]:
    """Render an exception as the `error` field of a job envelope."""
    data: dict[str, Any] = {
        "type": type(error).__name__,
        "message": str(error),
    }
    if isinstance(error, TransientError):
        data["transient"] = True
    return data


def require_envelope(job: Any, operation: str) -> dict[str, Any]:
    """Check that ``job`` is a dict envelope."""
    if not isinstance(job, dict):
        raise InvalidJobError(
            f"{operation}: expected a job object, got {type(job).__name__}"
        )
    return job


def require_fields(job: Any, operation: str, *fields: str) -> dict[str, Any]:
    """
    Check that a job envelope carries the fields an operation needs.

    Raises:
        InvalidJobError: If the job is not a dict or a field is missing/null
    """
    job = require_envelope(job, operation)
    missing = [name for name in fields if job.get(name) is None]
    if missing:
        raise InvalidJobError(
            f"{operation}: job is missing required field(s): {', '.join(missing)}"
        )
    return job


def get_offset(job: dict[str, Any]) -> int:
    """Read the log offset from a job, defaulting to 0."""
    offset = job.get("offset")
    if offset is None:
        return 0
    # bool is an int subclass
    if isinstance(offset, bool) or not isinstance(offset, int):
        if isinstance(offset, float) and offset.is_integer():
            offset = int(offset)
        else:
            raise InvalidJobError(f"offset must be a non-negative integer, got {offset!r}")
    if offset < 0:
        raise InvalidJobError(f"offset must be a non-negative integer, got {offset}")
    return offset
