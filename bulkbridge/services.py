"""
Service bundle passed to every operation.

Groups the collaborators an operation may need so they are handed over
explicitly instead of being looked up as globals.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bulkbridge.id_store import DEFAULT_STORE_SHEET, IdStore
from bulkbridge.loaders import LoaderRegistry
from bulkbridge.logs import DEFAULT_LOG_SHEET
from bulkbridge.session import InMemoryPropertyStore, SessionState, SqlitePropertyStore
from bulkbridge.sheets import InMemoryWorkbook, SheetDAO, SqliteWorkbook

if TYPE_CHECKING:
    from bulkbridge.config import BulkbridgeConfig

logger = logging.getLogger(__name__)


@dataclass
class BridgeServices:
    """Collaborators shared by the sidebar operations."""

    workbook: SheetDAO
    loaders: LoaderRegistry
    id_store: IdStore
    session: SessionState
    log_sheet: str = DEFAULT_LOG_SHEET

    @classmethod
    def in_memory(
        cls,
        loaders: LoaderRegistry | None = None,
        log_sheet: str = DEFAULT_LOG_SHEET,
        store_sheet: str = DEFAULT_STORE_SHEET,
    ) -> "BridgeServices":
        """Build a bundle with in-memory collaborators (tests, dry runs)."""
        workbook = InMemoryWorkbook([log_sheet, store_sheet])
        return cls(
            workbook=workbook,
            loaders=loaders or LoaderRegistry.create_noop(),
            id_store=IdStore(workbook, store_sheet),
            session=SessionState(InMemoryPropertyStore()),
            log_sheet=log_sheet,
        )


def build_services(config: "BulkbridgeConfig", dry_run: bool = False) -> BridgeServices:
    """
    Build the service bundle from config.

    Args:
        config: Loaded BulkbridgeConfig
        dry_run: Use in-memory collaborators and no-op loaders

    Returns:
        BridgeServices ready to hand to a Dispatcher
    """
    if dry_run:
        logger.info("Dry run: using in-memory workbook and no-op loaders")
        return BridgeServices.in_memory(
            log_sheet=config.log_sheet,
            store_sheet=config.store_sheet,
        )

    workbook = SqliteWorkbook(config.sqlite_path, [config.log_sheet, config.store_sheet])
    session = SessionState(SqlitePropertyStore(config.sqlite_path, config.user))
    id_store = IdStore(workbook, config.store_sheet)
    loaders = LoaderRegistry.create_default(
        config.loaders,
        allowed_modules=config.allowed_loader_modules,
        workbook=workbook,
        session=session,
        id_store=id_store,
    )
    return BridgeServices(
        workbook=workbook,
        loaders=loaders,
        id_store=id_store,
        session=session,
        log_sheet=config.log_sheet,
    )
