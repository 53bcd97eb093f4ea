"""
Sidebar operations.

Every operation takes the parsed job and the service bundle, validates the
fields it needs, hands the work to one collaborator and returns the same job
object, augmented in place, so fields the operation does not touch survive.

Operation names are the wire names the sidebar calls.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from bulkbridge.envelope import require_envelope, require_fields, safe_parse
from bulkbridge.errors import InvalidJobError
from bulkbridge.logs import write_logs as append_logs

if TYPE_CHECKING:
    from bulkbridge.services import BridgeServices

logger = logging.getLogger(__name__)

# Type alias for operation handlers
OperationFn = Callable[[Any, "BridgeServices"], Any]


class Operation(str, Enum):
    """Operations exposed to the sidebar."""
    CLEAR = "clear"
    GO_TO_TAB = "goToTab"
    IDENTIFY_SPECIFIED_ITEMS_TO_LOAD = "identifySpecifiedItemsToLoad"
    CM_LOAD = "cmLoad"
    CM_PUSH = "cmPush"
    UPDATE_FEED = "updateFeed"
    SAVE_ID_MAP = "saveIdMap"
    LOAD_ID_MAP = "loadIdMap"
    WRITE_LOGS = "writeLogs"
    INITIALIZE_JOB = "initializeJob"
    CREATE_PUSH_JOBS = "createPushJobs"

    @property
    def uses_loader(self) -> bool:
        """True for operations delegated to the entity loader."""
        return self in _LOADER_METHODS

    @property
    def takes_raw_input(self) -> bool:
        """True for operations handed the caller's text without decoding."""
        return self is Operation.GO_TO_TAB


# Loader operations -> Loader method name
_LOADER_METHODS = {
    Operation.IDENTIFY_SPECIFIED_ITEMS_TO_LOAD: "identify_items_to_load",
    Operation.CM_LOAD: "load",
    Operation.CM_PUSH: "push",
    Operation.UPDATE_FEED: "update_feed",
    Operation.CREATE_PUSH_JOBS: "create_push_jobs",
}


def clear(job: Any, services: "BridgeServices") -> dict[str, Any]:
    """
    Clear a range in a tab.

    Requires `job.sheetName`; `job.range` is optional and defaults to the
    whole tab.
    """
    job = require_fields(job, Operation.CLEAR.value, "sheetName")
    services.workbook.clear(job["sheetName"], job.get("range"))
    return job


def go_to_tab(tab_name: Any, services: "BridgeServices") -> None:
    """
    Activate a tab. Takes the bare tab name rather than a job envelope.

    The dispatcher hands over the caller's text undecoded, so names such as
    "1.50", "true" or "null" reach the workbook verbatim. A JSON-quoted
    name ('"Log"') is unquoted.
    """
    if isinstance(tab_name, (bytes, bytearray)):
        try:
            tab_name = tab_name.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidJobError("goToTab: tab name is not valid UTF-8")
    elif isinstance(tab_name, (int, float)) and not isinstance(tab_name, bool):
        tab_name = str(tab_name)

    if isinstance(tab_name, str) and tab_name.startswith('"'):
        unquoted = safe_parse(tab_name)
        if isinstance(unquoted, str):
            tab_name = unquoted

    if not isinstance(tab_name, str) or not tab_name:
        raise InvalidJobError(f"goToTab: expected a tab name, got {tab_name!r}")
    services.workbook.go_to_tab(tab_name)


def _delegate_to_loader(operation: Operation) -> OperationFn:
    method_name = _LOADER_METHODS[operation]

    def run(job: Any, services: "BridgeServices") -> dict[str, Any]:
        job = require_fields(job, operation.value, "entity")
        loader = services.loaders.get(job["entity"])
        logger.info(
            f"{operation.value}: {job['entity']}",
            extra={"operation": operation.value, "entity": job["entity"]},
        )
        getattr(loader, method_name)(job)
        return job

    run.__name__ = method_name
    run.__doc__ = f"Forward the job to Loader.{method_name} for `job.entity`."
    return run


identify_specified_items_to_load = _delegate_to_loader(Operation.IDENTIFY_SPECIFIED_ITEMS_TO_LOAD)
cm_load = _delegate_to_loader(Operation.CM_LOAD)
cm_push = _delegate_to_loader(Operation.CM_PUSH)
update_feed = _delegate_to_loader(Operation.UPDATE_FEED)
create_push_jobs = _delegate_to_loader(Operation.CREATE_PUSH_JOBS)


def save_id_map(job: Any, services: "BridgeServices") -> dict[str, Any]:
    """Persist `job.idMap` to the Store tab."""
    job = require_envelope(job, Operation.SAVE_ID_MAP.value)
    id_map = job.get("idMap")
    if id_map is not None and not isinstance(id_map, dict):
        raise InvalidJobError("saveIdMap: idMap must be an object")
    services.id_store.initialize(id_map)
    services.id_store.store()
    return job


def load_id_map(job: Any, services: "BridgeServices") -> dict[str, Any]:
    """Read the id map from the Store tab into `job.idMap`."""
    job = require_envelope(job, Operation.LOAD_ID_MAP.value)
    services.id_store.load()
    job["idMap"] = services.id_store.get_data()
    return job


def write_logs(job: Any, services: "BridgeServices") -> dict[str, Any]:
    """Flush sub-job logs to the Log tab (see bulkbridge.logs)."""
    return append_logs(job, services.workbook, services.log_sheet)


def initialize_job(job: Any, services: "BridgeServices") -> dict[str, Any]:
    """
    Start a push job by advancing the session job id.

    The job id is part of the loaders' cache keys, so stale objects cached
    by an earlier execution are not reused.
    """
    # The sidebar sends an empty payload here
    if job is None or job == "":
        job = {}
    job = require_envelope(job, Operation.INITIALIZE_JOB.value)
    job["jobId"] = services.session.next_job_id()
    logger.info(f"Initialized job {job['jobId']}")
    return job


def default_operations() -> dict[str, OperationFn]:
    """Build the operation table keyed by wire name."""
    return {
        Operation.CLEAR.value: clear,
        Operation.GO_TO_TAB.value: go_to_tab,
        Operation.IDENTIFY_SPECIFIED_ITEMS_TO_LOAD.value: identify_specified_items_to_load,
        Operation.CM_LOAD.value: cm_load,
        Operation.CM_PUSH.value: cm_push,
        Operation.UPDATE_FEED.value: update_feed,
        Operation.SAVE_ID_MAP.value: save_id_map,
        Operation.LOAD_ID_MAP.value: load_id_map,
        Operation.WRITE_LOGS.value: write_logs,
        Operation.INITIALIZE_JOB.value: initialize_job,
        Operation.CREATE_PUSH_JOBS.value: create_push_jobs,
    }
