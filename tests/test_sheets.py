"""Tests for the workbook implementations (in-memory and SQLite)."""

import pytest
from bulkbridge.errors import PermanentError
from bulkbridge.sheets import InMemoryWorkbook, SheetDAO, SqliteWorkbook


@pytest.fixture(params=["memory", "sqlite"])
def workbook(request, tmp_path):
    """Each test runs against both workbook backends."""
    if request.param == "memory":
        return InMemoryWorkbook(["Log", "Store", "Campaign"])
    return SqliteWorkbook(tmp_path / "workbook.db", ["Log", "Store", "Campaign"])


def test_implements_protocol(workbook):
    assert isinstance(workbook, SheetDAO)


class TestSetAndGetValues:

    def test_round_trip(self, workbook):
        workbook.set_values("Log", "A1:B2", [["INFO", "start"], ["ERROR", "fail"]])
        assert workbook.get_values("Log", "A:B") == [["INFO", "start"], ["ERROR", "fail"]]

    def test_append_below_existing_rows(self, workbook):
        workbook.set_values("Log", "A1:B1", [["INFO", "one"]])
        workbook.set_values("Log", "A2:B3", [["INFO", "two"], ["INFO", "three"]])
        assert [row[1] for row in workbook.get_values("Log", "A:B")] == ["one", "two", "three"]

    def test_values_keep_their_types(self, workbook):
        workbook.set_values("Campaign", "A1:C1", [[1, 2.5, True]])
        assert workbook.get_values("Campaign", "A1:C1") == [[1, 2.5, True]]

    def test_read_subrange(self, workbook):
        workbook.set_values("Campaign", "A1:B2", [["a", "b"], ["c", "d"]])
        assert workbook.get_values("Campaign", "B1:B2") == [["b"], ["d"]]
        assert workbook.get_values("Campaign", "A2:B") == [["c", "d"]]

    def test_blank_cells_read_as_empty_string(self, workbook):
        workbook.set_values("Campaign", "A1", [["x"]])
        workbook.set_values("Campaign", "B3", [["y"]])
        assert workbook.get_values("Campaign", "A:B") == [["x", ""], ["", ""], ["", "y"]]

    def test_empty_sheet_reads_empty(self, workbook):
        assert workbook.get_values("Store", "A:A") == []

    def test_unknown_sheet_reads_empty(self, workbook):
        assert workbook.get_values("Nope", "A:A") == []

    def test_write_creates_sheet(self, workbook):
        workbook.set_values("Placement", "A1", [["p"]])
        assert "Placement" in workbook.sheet_names

    def test_row_count_mismatch_raises(self, workbook):
        with pytest.raises(ValueError, match="rows"):
            workbook.set_values("Log", "A1:B3", [["INFO", "only one"]])

    def test_column_count_mismatch_raises(self, workbook):
        with pytest.raises(ValueError, match="columns"):
            workbook.set_values("Log", "A1:B1", [["INFO"]])


class TestClear:

    def test_clear_whole_sheet(self, workbook):
        workbook.set_values("Log", "A1:B1", [["INFO", "x"]])
        workbook.clear("Log")
        assert workbook.get_values("Log", "A:B") == []

    def test_clear_range_leaves_other_cells(self, workbook):
        workbook.set_values("Campaign", "A1:B2", [["a", "b"], ["c", "d"]])
        workbook.clear("Campaign", "A2:B2")
        assert workbook.get_values("Campaign", "A:B") == [["a", "b"]]

    def test_clear_leaves_other_sheets(self, workbook):
        workbook.set_values("Log", "A1", [["x"]])
        workbook.set_values("Store", "A1", [["{}"]])
        workbook.clear("Log")
        assert workbook.get_values("Store", "A:A") == [["{}"]]

    def test_clear_unknown_sheet_is_noop(self, workbook):
        workbook.clear("Nope")


class TestGoToTab:

    def test_sets_active_tab(self, workbook):
        workbook.go_to_tab("Campaign")
        assert workbook.active_tab == "Campaign"

    def test_unknown_tab_raises(self, workbook):
        with pytest.raises(PermanentError, match="Sheet not found"):
            workbook.go_to_tab("Nope")


def test_sqlite_workbook_persists_across_instances(tmp_path):
    path = tmp_path / "workbook.db"
    SqliteWorkbook(path, ["Log"]).set_values("Log", "A1:B1", [["INFO", "kept"]])
    assert SqliteWorkbook(path).get_values("Log", "A:B") == [["INFO", "kept"]]
