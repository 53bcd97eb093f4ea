"""
Log append-with-offset.

Loaders attach log rows to each sub-job as two-column rows
(level/timestamp, message). The sidebar periodically flushes them to the Log
tab, passing back the offset returned by the previous flush so the rows can
be appended without re-reading the tab.

    offset == 0  -> start fresh: the Log tab is cleared before writing
    offset == N  -> append starting at row N + 1

After writing k rows the returned offset is N + k.
"""

import logging
from typing import Any

from bulkbridge.envelope import get_offset, require_envelope
from bulkbridge.errors import InvalidJobError
from bulkbridge.sheets.a1 import row_range
from bulkbridge.sheets.base import SheetDAO

logger = logging.getLogger(__name__)

DEFAULT_LOG_SHEET = "Log"


def drain_logs(sub_jobs: list[dict[str, Any]]) -> list[list[Any]]:
    """
    Collect log rows from sub-jobs in order.

    Sub-jobs without a `logs` field contribute nothing and are left as is.
    The sub-jobs are not modified; see `reset_logs`.

    Raises:
        InvalidJobError: If a sub-job is not an object or a row is not a
            two-column list
    """
    rows: list[list[Any]] = []
    for i, sub_job in enumerate(sub_jobs):
        if not isinstance(sub_job, dict):
            raise InvalidJobError(f"jobs[{i}] must be an object")
        logs = sub_job.get("logs")
        if logs is None:
            continue
        if not isinstance(logs, list):
            raise InvalidJobError(f"jobs[{i}].logs must be a list")
        for j, row in enumerate(logs):
            if not isinstance(row, list) or len(row) != 2:
                raise InvalidJobError(f"jobs[{i}].logs[{j}] must be a two-column row, got {row!r}")
        rows.extend(logs)
    return rows


def reset_logs(sub_jobs: list[dict[str, Any]]) -> None:
    """Empty the `logs` of every sub-job that carries them."""
    for sub_job in sub_jobs:
        if sub_job.get("logs") is not None:
            sub_job["logs"] = []


def write_logs(job: dict[str, Any], workbook: SheetDAO, sheet_name: str = DEFAULT_LOG_SHEET) -> dict[str, Any]:
    """
    Flush sub-job logs to the Log tab.

    Args:
        job: Envelope with `jobs` (sub-jobs carrying `logs`) and `offset`
        workbook: Workbook to write to
        sheet_name: Name of the log tab

    Returns:
        The same job, with `offset` advanced by the number of rows written
        and every sub-job's `logs` emptied

    Sub-job logs are only emptied once the rows are written, so a failed
    flush leaves them in the job for the next attempt.
    """
    job = require_envelope(job, "writeLogs")
    offset = get_offset(job)
    job["offset"] = offset

    sub_jobs = job.get("jobs") or []
    if not isinstance(sub_jobs, list):
        raise InvalidJobError("writeLogs: jobs must be a list")

    rows = drain_logs(sub_jobs)
    if not rows:
        return job

    if offset == 0:
        workbook.clear(sheet_name)

    target = row_range(offset + 1, offset + len(rows))
    workbook.set_values(sheet_name, target, rows)
    reset_logs(sub_jobs)
    job["offset"] = offset + len(rows)

    logger.debug(f"Appended {len(rows)} log row(s) at {sheet_name}!{target}")
    return job
