"""
ID map store.

Loaders map local ids typed by the user in the feed (e.g. "ext123") to the
ids the advertising API assigns on insert. The map must survive between
sidebar calls, so it is persisted in the Store tab as JSON text split into
column-A cells of at most CELL_LIMIT characters.
"""

import json
import logging
from typing import Any, Optional

from bulkbridge.sheets.a1 import row_range
from bulkbridge.sheets.base import SheetDAO

logger = logging.getLogger(__name__)

# Hosted spreadsheets cap a single cell at 50,000 characters
CELL_LIMIT = 50000

DEFAULT_STORE_SHEET = "Store"


class IdStore:
    """
    Persisted mapping from logical key to external identifier.

    Usage:
        store = IdStore(workbook)
        store.initialize({"ext123": "987654"})
        store.store()

        store.load()
        store.get_data()  # {"ext123": "987654"}
    """

    def __init__(self, workbook: SheetDAO, sheet_name: str = DEFAULT_STORE_SHEET) -> None:
        self.workbook = workbook
        self.sheet_name = sheet_name
        self._data: dict[str, Any] = {}

    def initialize(self, id_map: Optional[dict[str, Any]]) -> None:
        """Replace the in-memory map. None resets it to empty."""
        if id_map is not None and not isinstance(id_map, dict):
            raise TypeError(f"idMap must be an object, got {type(id_map).__name__}")
        self._data = dict(id_map or {})

    def get_data(self) -> dict[str, Any]:
        return self._data

    def store(self) -> None:
        """Write the in-memory map to the Store tab, replacing its contents."""
        text = json.dumps(self._data)
        chunks = [text[i:i + CELL_LIMIT] for i in range(0, len(text), CELL_LIMIT)]

        self.workbook.clear(self.sheet_name)
        self.workbook.set_values(
            self.sheet_name,
            row_range(1, len(chunks), "A", "A"),
            [[chunk] for chunk in chunks],
        )
        logger.info(f"Stored id map with {len(self._data)} entries in {len(chunks)} cell(s)")

    def load(self) -> None:
        """Read the map back from the Store tab. An empty tab yields an empty map."""
        rows = self.workbook.get_values(self.sheet_name, "A:A")
        text = "".join(str(row[0]) for row in rows if row and row[0] != "")
        self._data = json.loads(text) if text else {}
        logger.info(f"Loaded id map with {len(self._data)} entries")
