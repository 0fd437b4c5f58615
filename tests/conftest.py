from datetime import date

import pytest

from gantt_reports.sheets.models import Grid, GridRow, to_cell

D1 = date(2024, 1, 1)
D2 = date(2024, 1, 2)
D3 = date(2024, 1, 3)
D5 = date(2024, 1, 5)


def make_grid(dates, rows):
    """Build a Grid from header dates and (category, sub-category, values) tuples."""
    return Grid(
        dates=list(dates),
        rows=[
            GridRow(
                category=category,
                sub_category=sub_category,
                cells=[to_cell(value) for value in values] + [to_cell(None)] * (len(dates) - len(values)),
            )
            for category, sub_category, values in rows
        ],
    )


@pytest.fixture
def id_map():
    return {"Alice": "111", "Bob": "222", "Carol": "333"}


@pytest.fixture
def schedule_grid():
    """Three-day schedule: {Alice, Bob} -> {Bob, Carol} -> {Carol}, plus an untracked row."""
    return make_grid(
        [D1, D2, D3],
        [
            ("קו", "North Gate A", ["Alice", "Bob", ""]),
            ("מפלג", "HQ", ["Bob", "Carol", "Carol"]),
            ("Kitchen", "Main", ["", "", ""]),
        ],
    )
