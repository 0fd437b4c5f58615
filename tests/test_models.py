from datetime import date, datetime

import pytest

from gantt_reports.sheets.models import (
    Cell,
    CellKind,
    Grid,
    GridError,
    OutputTable,
    cell_text,
    format_date,
    parse_header_date,
    to_cell,
)


class TestParseHeaderDate:
    def test_serial_number(self):
        assert parse_header_date(45292) == date(2024, 1, 1)

    def test_fractional_serial_keeps_the_day(self):
        assert parse_header_date(45292.75) == date(2024, 1, 1)

    @pytest.mark.parametrize("text", ["05/01/24", "05/01/2024", "2024-01-05"])
    def test_text_formats(self, text):
        assert parse_header_date(text) == date(2024, 1, 5)

    def test_datetime_and_date(self):
        assert parse_header_date(datetime(2024, 1, 5, 13, 30)) == date(2024, 1, 5)
        assert parse_header_date(date(2024, 1, 5)) == date(2024, 1, 5)

    @pytest.mark.parametrize("value", [None, "", " ", "\t "])
    def test_blank_is_none(self, value):
        assert parse_header_date(value) is None

    def test_malformed_raises(self):
        with pytest.raises(GridError, match="Malformed date header"):
            parse_header_date("next tuesday")


class TestCells:
    def test_cell_text_drops_float_tail(self):
        assert cell_text(12345.0) == "12345"
        assert cell_text(1.5) == "1.5"
        assert cell_text(None) == ""
        assert cell_text("Alice") == "Alice"

    def test_to_cell_kinds(self):
        assert to_cell("").is_empty
        assert to_cell(None).kind is CellKind.EMPTY
        assert to_cell("Alice") == Cell.of_text("Alice")
        assert to_cell(7) == Cell.of_text("7")
        assert to_cell(date(2024, 1, 1)).kind is CellKind.DATE

    def test_whitespace_is_not_empty(self):
        assert not to_cell(" ").is_empty


def test_format_date():
    assert format_date(date(2024, 3, 7)) == "07/03/24"


def test_date_at_without_header_raises():
    grid = Grid(dates=[date(2024, 1, 1), None], rows=[])
    assert grid.date_at(0) == date(2024, 1, 1)
    with pytest.raises(GridError):
        grid.date_at(1)
    with pytest.raises(GridError):
        grid.date_at(5)


def test_output_table_values_include_header():
    table = OutputTable("Summary", ["Name"], [["Alice"], ["Bob"]])
    assert table.values == [["Name"], ["Alice"], ["Bob"]]
