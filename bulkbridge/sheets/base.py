"""
Workbook data-access protocol.

The sidebar bridge never talks to a spreadsheet backend directly; every read
and write goes through a SheetDAO. This keeps the operations testable and
lets the backend be swapped (in-memory, SQLite, a hosted spreadsheet API).
"""

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from bulkbridge.sheets.a1 import GridRange

Cells = dict[tuple[int, int], Any]


@runtime_checkable
class SheetDAO(Protocol):
    """Protocol for workbook reads and writes."""

    def clear(self, sheet_name: str, range_notation: Optional[str] = None) -> None:
        """
        Clear values in a sheet.

        Args:
            sheet_name: Name of the tab
            range_notation: A1 range to clear; None clears the whole tab
        """
        ...

    def set_values(
        self,
        sheet_name: str,
        range_notation: str,
        rows: Sequence[Sequence[Any]],
    ) -> None:
        """
        Write a block of rows into a sheet, creating the sheet if needed.

        Args:
            sheet_name: Name of the tab
            range_notation: A1 range whose top-left cell anchors the write
            rows: Row-major values; must fit the range
        """
        ...

    def get_values(self, sheet_name: str, range_notation: str) -> list[list[Any]]:
        """
        Read a block of values.

        Returns:
            Rows from the start of the range down to the last populated row.
            Blank cells read as "". An empty or missing sheet returns [].
        """
        ...

    def go_to_tab(self, tab_name: str) -> None:
        """Make a tab the active one."""
        ...


def check_shape(grid: GridRange, rows: Sequence[Sequence[Any]], notation: str) -> None:
    """
    Check that rows fit a range.

    Closed dimensions must match exactly; open dimensions accept any size.

    Raises:
        ValueError: On a shape mismatch
    """
    if grid.num_rows is not None and len(rows) != grid.num_rows:
        raise ValueError(
            f"Range {notation} has {grid.num_rows} rows but data has {len(rows)}"
        )
    if grid.num_cols is not None:
        for i, row in enumerate(rows):
            if len(row) != grid.num_cols:
                raise ValueError(
                    f"Range {notation} has {grid.num_cols} columns "
                    f"but row {i} has {len(row)}"
                )


def place_rows(grid: GridRange, rows: Sequence[Sequence[Any]]) -> Cells:
    """Map row-major values onto (row, col) cells anchored at the range start."""
    cells: Cells = {}
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            cells[(grid.start_row + r, grid.start_col + c)] = value
    return cells


def cells_to_rows(cells: Cells, grid: GridRange) -> list[list[Any]]:
    """Read the cells inside a range back into rows (see SheetDAO.get_values)."""
    inside = [(r, c) for (r, c), v in cells.items() if grid.contains(r, c) and v != ""]
    if not inside:
        return []

    last_row = grid.end_row if grid.end_row is not None else max(r for r, _ in inside)
    last_col = grid.end_col if grid.end_col is not None else max(c for _, c in inside)
    # Trailing blank rows are not returned
    last_row = min(last_row, max(r for r, _ in inside))

    return [
        [cells.get((r, c), "") for c in range(grid.start_col, last_col + 1)]
        for r in range(grid.start_row, last_row + 1)
    ]
