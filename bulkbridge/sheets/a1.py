"""A1 notation helpers for sheet ranges."""

import re
from dataclasses import dataclass
from typing import Optional

_CELL_RE = re.compile(r"^([A-Za-z]*)(\d*)$")


@dataclass(frozen=True)
class GridRange:
    """
    A parsed A1 range. Rows and columns are 1-based and inclusive.

    An end of None means the range is open in that direction
    (e.g. "A:A" has no row bounds, "A3:B" has no end row).
    """
    start_row: int = 1
    start_col: int = 1
    end_row: Optional[int] = None
    end_col: Optional[int] = None

    @property
    def num_rows(self) -> Optional[int]:
        if self.end_row is None:
            return None
        return self.end_row - self.start_row + 1

    @property
    def num_cols(self) -> Optional[int]:
        if self.end_col is None:
            return None
        return self.end_col - self.start_col + 1

    def contains(self, row: int, col: int) -> bool:
        if row < self.start_row or col < self.start_col:
            return False
        if self.end_row is not None and row > self.end_row:
            return False
        if self.end_col is not None and col > self.end_col:
            return False
        return True


def column_to_index(letters: str) -> int:
    """Convert column letters to a 1-based index ("A" -> 1, "AA" -> 27)."""
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index


def row_range(start_row: int, end_row: int, first_col: str = "A", last_col: str = "B") -> str:
    """Build an A1 range covering whole rows, e.g. row_range(1, 2) -> "A1:B2"."""
    return f"{first_col}{start_row}:{last_col}{end_row}"


def parse_a1(notation: str) -> GridRange:
    """
    Parse A1 notation into a GridRange.

    Supports "A1", "A1:B2", "A:B", "A3:B" and "3:5". A sheet prefix
    ("Log!A1:B2") is ignored.

    Raises:
        ValueError: If the notation is malformed
    """
    if "!" in notation:
        notation = notation.split("!", 1)[1]
    notation = notation.strip().replace("$", "")
    if not notation:
        raise ValueError("Empty A1 notation")

    parts = notation.split(":")
    if len(parts) > 2:
        raise ValueError(f"Invalid A1 notation: {notation}")

    start = _parse_cell(parts[0], notation)
    if len(parts) == 1:
        col, row = start
        if col is None or row is None:
            raise ValueError(f"Invalid A1 notation: {notation}")
        return GridRange(start_row=row, start_col=col, end_row=row, end_col=col)

    end = _parse_cell(parts[1], notation)
    grid = GridRange(
        start_row=start[1] or 1,
        start_col=start[0] or 1,
        end_row=end[1],
        end_col=end[0],
    )
    if grid.end_row is not None and grid.end_row < grid.start_row:
        raise ValueError(f"Invalid A1 notation (end before start): {notation}")
    if grid.end_col is not None and grid.end_col < grid.start_col:
        raise ValueError(f"Invalid A1 notation (end before start): {notation}")
    return grid


def _parse_cell(cell: str, notation: str) -> tuple[Optional[int], Optional[int]]:
    match = _CELL_RE.match(cell)
    if not match or not cell:
        raise ValueError(f"Invalid A1 notation: {notation}")
    letters, digits = match.groups()
    col = column_to_index(letters) if letters else None
    row = int(digits) if digits else None
    if row == 0:
        raise ValueError(f"Invalid A1 notation (rows start at 1): {notation}")
    return col, row
