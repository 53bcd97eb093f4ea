"""
Workbook access for bulkbridge.

Provides the SheetDAO protocol and its implementations:
- InMemoryWorkbook: For tests and dry runs
- SqliteWorkbook: Local persistence in a SQLite file
"""

from bulkbridge.sheets.a1 import GridRange, parse_a1, row_range
from bulkbridge.sheets.base import SheetDAO
from bulkbridge.sheets.memory import InMemoryWorkbook
from bulkbridge.sheets.sqlite import SqliteWorkbook

__all__ = [
    "GridRange",
    "InMemoryWorkbook",
    "SheetDAO",
    "SqliteWorkbook",
    "parse_a1",
    "row_range",
]
