"""In-memory workbook for tests and dry runs."""

import logging
from typing import Any, Optional, Sequence

from bulkbridge.errors import PermanentError
from bulkbridge.sheets.a1 import parse_a1
from bulkbridge.sheets.base import Cells, cells_to_rows, check_shape, place_rows

logger = logging.getLogger(__name__)


class InMemoryWorkbook:
    """
    SheetDAO backed by plain dicts.

    Usage:
        workbook = InMemoryWorkbook(["Log", "Store", "Campaign"])
        workbook.set_values("Log", "A1:B1", [["INFO", "start"]])
        workbook.get_values("Log", "A:B")
    """

    def __init__(self, sheet_names: Optional[Sequence[str]] = None) -> None:
        self._sheets: dict[str, Cells] = {name: {} for name in sheet_names or []}
        self.active_tab: Optional[str] = None

    @property
    def sheet_names(self) -> list[str]:
        return list(self._sheets.keys())

    def clear(self, sheet_name: str, range_notation: Optional[str] = None) -> None:
        cells = self._sheets.get(sheet_name)
        if cells is None:
            return
        if range_notation is None:
            cells.clear()
            return
        grid = parse_a1(range_notation)
        for key in [k for k in cells if grid.contains(*k)]:
            del cells[key]

    def set_values(
        self,
        sheet_name: str,
        range_notation: str,
        rows: Sequence[Sequence[Any]],
    ) -> None:
        grid = parse_a1(range_notation)
        check_shape(grid, rows, range_notation)
        self._sheets.setdefault(sheet_name, {}).update(place_rows(grid, rows))
        logger.debug(f"Wrote {len(rows)} row(s) to {sheet_name}!{range_notation}")

    def get_values(self, sheet_name: str, range_notation: str) -> list[list[Any]]:
        cells = self._sheets.get(sheet_name)
        if not cells:
            return []
        return cells_to_rows(cells, parse_a1(range_notation))

    def go_to_tab(self, tab_name: str) -> None:
        if tab_name not in self._sheets:
            raise PermanentError(f"Sheet not found: {tab_name}")
        self.active_tab = tab_name
