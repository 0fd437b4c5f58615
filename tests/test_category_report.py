from conftest import D1, D2, D3, make_grid
from gantt_reports.reports.category_report import (
    build_category_rows,
    find_date_column,
    report_header,
    split_sub_category,
)


def test_header_starts_with_today():
    assert report_header(D2) == ["02/01/24", "Sub-category 1", "Sub-category 2", "Sub-category 3", "Name", "ID"]


class TestSplitSubCategory:
    def test_pads_to_three(self):
        assert split_sub_category("HQ") == ["HQ", "", ""]

    def test_keeps_first_three_tokens(self):
        assert split_sub_category("a b c d") == ["a", "b", "c"]

    def test_splits_on_single_spaces(self):
        assert split_sub_category("a  b") == ["a", "", "b"]

    def test_empty(self):
        assert split_sub_category("") == ["", "", ""]


def test_only_tracked_categories(schedule_grid, id_map):
    rows = build_category_rows(schedule_grid, id_map, D1)
    assert rows == [
        ["קו", "North", "Gate", "A", "Alice", "111"],
        ["מפלג", "HQ", "", "", "Bob", "222"],
    ]


def test_tracked_categories_are_configurable(schedule_grid, id_map):
    assert build_category_rows(schedule_grid, id_map, D1, tracked_categories=["מפלג"]) == [
        ["מפלג", "HQ", "", "", "Bob", "222"],
    ]
    assert build_category_rows(schedule_grid, id_map, D1, tracked_categories=["Laundry"]) == []


def test_several_names_stack_below_the_first(id_map):
    grid = make_grid([D1], [("קו", "North Gate", ["Alice, Bob ,Zed"])])
    rows = build_category_rows(grid, id_map, D1)
    assert rows == [
        ["קו", "North", "Gate", "", "Alice", "111"],
        ["", "", "", "", "Bob", "222"],
        ["", "", "", "", "Zed", "ID not found"],
    ]


def test_repeat_category_columns(id_map):
    grid = make_grid([D1], [("קו", "North Gate", ["Alice, Bob"])])
    rows = build_category_rows(grid, id_map, D1, repeat_category_columns=True)
    assert rows == [
        ["קו", "North", "Gate", "", "Alice", "111"],
        ["קו", "North", "Gate", "", "Bob", "222"],
    ]


def test_row_with_nobody_today_is_left_out(schedule_grid, id_map):
    rows = build_category_rows(schedule_grid, id_map, D3)
    assert rows == [["מפלג", "HQ", "", "", "Carol", "333"]]
    assert build_category_rows(schedule_grid, id_map, D1, tracked_categories=["Kitchen"]) == []


def test_today_missing_from_grid(schedule_grid, id_map):
    assert build_category_rows(schedule_grid, id_map, D3.replace(day=20)) == []
    assert build_category_rows(schedule_grid, id_map, D2.replace(year=2025)) == []


def test_find_date_column_takes_first_match():
    grid = make_grid([D1, D2, D2], [])
    assert find_date_column(grid, D2) == 1
    assert find_date_column(grid, D3) is None
