"""
SQLite-backed workbook.

Persists cells for local runs of the bridge. Each call opens its own
connection and closes it before returning; the host runs one call at a time
per session so there is no connection sharing.

Schema:
    sheets(name)                    - known tabs
    cells(sheet, row, col, value)   - value is JSON text
    workbook_meta(key, value)       - active_tab
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Sequence

from bulkbridge.errors import PermanentError
from bulkbridge.sheets.a1 import parse_a1
from bulkbridge.sheets.base import cells_to_rows, check_shape, place_rows

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sheets (name TEXT PRIMARY KEY);
CREATE TABLE IF NOT EXISTS cells (
    sheet TEXT NOT NULL,
    row INTEGER NOT NULL,
    col INTEGER NOT NULL,
    value TEXT,
    PRIMARY KEY (sheet, row, col)
);
CREATE TABLE IF NOT EXISTS workbook_meta (key TEXT PRIMARY KEY, value TEXT);
"""


class SqliteWorkbook:
    """SheetDAO persisting cells in a SQLite file."""

    def __init__(self, sqlite_path: Path | str, sheet_names: Optional[Sequence[str]] = None) -> None:
        self.sqlite_path = Path(sqlite_path).expanduser()
        self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)

        conn = self._connect()
        try:
            conn.executescript(_SCHEMA)
            for name in sheet_names or []:
                conn.execute("INSERT OR IGNORE INTO sheets (name) VALUES (?)", (name,))
            conn.commit()
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.sqlite_path)

    @property
    def sheet_names(self) -> list[str]:
        conn = self._connect()
        try:
            return [row[0] for row in conn.execute("SELECT name FROM sheets ORDER BY rowid")]
        finally:
            conn.close()

    @property
    def active_tab(self) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM workbook_meta WHERE key = 'active_tab'"
            ).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def clear(self, sheet_name: str, range_notation: Optional[str] = None) -> None:
        conn = self._connect()
        try:
            if range_notation is None:
                conn.execute("DELETE FROM cells WHERE sheet = ?", (sheet_name,))
            else:
                grid = parse_a1(range_notation)
                sql = "DELETE FROM cells WHERE sheet = ? AND row >= ? AND col >= ?"
                params: list[Any] = [sheet_name, grid.start_row, grid.start_col]
                if grid.end_row is not None:
                    sql += " AND row <= ?"
                    params.append(grid.end_row)
                if grid.end_col is not None:
                    sql += " AND col <= ?"
                    params.append(grid.end_col)
                conn.execute(sql, params)
            conn.commit()
        finally:
            conn.close()

    def set_values(
        self,
        sheet_name: str,
        range_notation: str,
        rows: Sequence[Sequence[Any]],
    ) -> None:
        grid = parse_a1(range_notation)
        check_shape(grid, rows, range_notation)
        cells = place_rows(grid, rows)

        conn = self._connect()
        try:
            conn.execute("INSERT OR IGNORE INTO sheets (name) VALUES (?)", (sheet_name,))
            conn.executemany(
                "INSERT OR REPLACE INTO cells (sheet, row, col, value) VALUES (?, ?, ?, ?)",
                [(sheet_name, r, c, json.dumps(v)) for (r, c), v in cells.items()],
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug(f"Wrote {len(rows)} row(s) to {sheet_name}!{range_notation}")

    def get_values(self, sheet_name: str, range_notation: str) -> list[list[Any]]:
        grid = parse_a1(range_notation)
        conn = self._connect()
        try:
            cursor = conn.execute(
                "SELECT row, col, value FROM cells WHERE sheet = ?", (sheet_name,)
            )
            cells = {(r, c): json.loads(v) for r, c, v in cursor.fetchall()}
        finally:
            conn.close()
        return cells_to_rows(cells, grid)

    def go_to_tab(self, tab_name: str) -> None:
        conn = self._connect()
        try:
            exists = conn.execute(
                "SELECT 1 FROM sheets WHERE name = ?", (tab_name,)
            ).fetchone()
            if not exists:
                raise PermanentError(f"Sheet not found: {tab_name}")
            conn.execute(
                "INSERT OR REPLACE INTO workbook_meta (key, value) VALUES ('active_tab', ?)",
                (tab_name,),
            )
            conn.commit()
        finally:
            conn.close()
